"""Service-level configuration."""

from pydantic import BaseModel, Field, field_validator


class ServiceConfig(BaseModel):
    """Configuration for the HTTP service surface and runtime settings."""

    # Host & Port
    ptgen_service_host: str = Field(
        default="0.0.0.0", description="ptgen service host address"
    )
    ptgen_service_port: int = Field(
        default=8080, ge=1, le=65535, description="ptgen service port"
    )

    # API Metadata
    api_title: str = Field(default="PT-Gen", description="API title")
    api_version: str = Field(default="0.6.1", description="API version")
    api_description: str = Field(
        default="Generate BBCode descriptions from douban, imdb, bangumi, steam, indienova and epic",
        description="API description",
    )
    author: str = Field(
        default="Rhilip", description="Author credited in the copyright field"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # CORS
    allowed_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    allowed_methods: list[str] = Field(
        default=["GET", "HEAD", "OPTIONS"], description="Allowed HTTP methods"
    )
    allowed_headers: list[str] = Field(
        default=[
            "Access-Control-Allow-Headers",
            "Origin",
            "Accept",
            "X-Requested-With",
            "Content-Type",
            "Access-Control-Request-Method",
            "Access-Control-Request-Headers",
        ],
        description="Allowed HTTP headers",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()
