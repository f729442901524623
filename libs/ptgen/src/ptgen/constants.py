"""Fixed messages and lookup tables shared by extractors."""

NONE_EXIST_ERROR = "The corresponding resource does not exist."
DOUBAN_BLOCKED_ERROR = "GenHelp was temporary banned by Douban, Please wait...."

MISSING_PARAMETERS_ERROR = (
    "Miss key of `site` or `sid` , or input unsupported resource `url`."
)
UNKNOWN_SITE_ERROR = "Unknown value of key `site`."
UNKNOWN_SOURCE_ERROR = "Unknown value of key `source`."
MISSING_SEARCH_ERROR = "Miss search function for `source`: {source}."

# bangumi subject type codes as used by the search API
BANGUMI_TYPE_NAMES = {
    1: "漫画/小说",
    2: "动画/二次元番",
    3: "音乐",
    4: "游戏",
    6: "三次元番",
}

# steam `data-os` attribute to display name
STEAM_OS_NAMES = {
    "win": "Windows",
    "mac": "Mac OS X",
    "linux": "SteamOS + Linux",
}

# steam language table support columns, in table order
STEAM_LANGUAGE_COLUMNS = ("界面", "完全音频", "字幕")

# headers that pass the steam age gate and force simplified chinese
STEAM_PAGE_HEADERS = {
    "Cookie": (
        "lastagecheckage=1-January-1975; birthtime=157737601; "
        "mature_content=1; wants_mature_content=1; Steam_Language=schinese"
    ),
}
