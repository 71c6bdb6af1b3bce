from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator


class TargetSite(BaseModel):
    """The website whose icon is being resolved, as a scheme + host base URL."""

    model_config = ConfigDict(frozen=True)

    base_url: str

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"unsupported scheme '{parsed.scheme}'")
        if not parsed.hostname:
            raise ValueError("missing host")
        return f"{parsed.scheme}://{parsed.netloc}"

    @classmethod
    def from_host(cls, host: str) -> "TargetSite":
        host = host.strip()
        if "://" not in host:
            host = f"https://{host}"
        return cls(base_url=host)


class WelcomeMessage(BaseModel):
    message: str
