"""Static landing page served when the root is requested without a query."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
  <meta charset="utf-8">
  <title>PT-Gen</title>
  <style>
    body { font-family: sans-serif; max-width: 960px; margin: 2em auto; }
    textarea { width: 100%; height: 28em; }
    input[type=text] { width: 70%; }
  </style>
</head>
<body>
  <h1>PT-Gen</h1>
  <p>Generate a PT description from douban, imdb, bangumi, steam, indienova or epic.</p>
  <form id="gen">
    <input type="text" id="query" placeholder="Resource url, or keywords to search">
    <select id="source">
      <option value="douban">douban</option>
      <option value="imdb">imdb</option>
      <option value="bangumi">bangumi</option>
    </select>
    <button type="submit">Go</button>
  </form>
  <ul id="results"></ul>
  <textarea id="output" readonly></textarea>
  <script>
    const output = document.getElementById("output");
    const results = document.getElementById("results");

    async function generate(url) {
      const resp = await fetch("?url=" + encodeURIComponent(url));
      const body = await resp.json();
      output.value = body.success ? body.format : body.error;
    }

    document.getElementById("gen").addEventListener("submit", async (event) => {
      event.preventDefault();
      const query = document.getElementById("query").value.trim();
      results.innerHTML = "";
      if (/^https?:\\/\\//.test(query)) {
        await generate(query);
        return;
      }
      const source = document.getElementById("source").value;
      const resp = await fetch("?search=" + encodeURIComponent(query) + "&source=" + source);
      const body = await resp.json();
      if (!body.success) {
        output.value = body.error;
        return;
      }
      for (const item of body.data) {
        const li = document.createElement("li");
        const link = document.createElement("a");
        link.href = "#";
        link.textContent = [item.year, item.subtype, item.title, item.subtitle]
          .filter(Boolean).join(" | ");
        link.addEventListener("click", (e) => { e.preventDefault(); generate(item.link); });
        li.appendChild(link);
        results.appendChild(li);
      }
    });
  </script>
</body>
</html>
"""
