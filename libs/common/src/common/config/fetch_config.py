"""Upstream fetch configuration."""

from pydantic import BaseModel, Field


class FetchConfig(BaseModel):
    """Configuration for requests issued against upstream sites."""

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Total timeout in seconds for a single upstream request",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        description="User-Agent header sent to upstream sites",
    )
    accept_language: str = Field(
        default="zh-CN,zh;q=0.9,en;q=0.8",
        description="Accept-Language header sent to upstream sites",
    )
