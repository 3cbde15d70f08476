"""
SEOmoz Data Models

URL metrics record returned by the Linkscape url-metrics endpoint and the
column bitmask used to select which fields the API populates.
"""

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# API limit for URLs in one batch (POST) call
MAX_BATCH_URLS = 10


class Cols(enum.IntFlag):
    """Linkscape column flags. OR them together to build a ``Cols`` value."""
    TITLE = 1
    CANONICAL_URL = 4
    SUBDOMAIN = 8
    ROOT_DOMAIN = 16
    EXTERNAL_EQUITY_LINKS = 32
    SUBDOMAIN_EXTERNAL_LINKS = 64
    ROOT_DOMAIN_EXTERNAL_LINKS = 128
    EQUITY_LINKS = 256
    SUBDOMAINS_LINKING = 512
    ROOT_DOMAINS_LINKING = 1024
    LINKS = 2048
    SUBDOMAIN_SUBDOMAINS_LINKING = 4096
    ROOT_DOMAIN_ROOT_DOMAINS_LINKING = 8192
    MOZRANK_URL = 16384
    MOZRANK_SUBDOMAIN = 32768
    MOZRANK_ROOT_DOMAIN = 65536
    MOZTRUST = 131072
    MOZTRUST_SUBDOMAIN = 262144
    MOZTRUST_ROOT_DOMAIN = 524288
    MOZRANK_EXTERNAL_EQUITY = 1048576
    MOZRANK_SUBDOMAIN_EXTERNAL_EQUITY = 2097152
    MOZRANK_ROOT_DOMAIN_EXTERNAL_EQUITY = 4194304
    MOZRANK_SUBDOMAIN_COMBINED = 8388608
    MOZRANK_ROOT_DOMAIN_COMBINED = 16777216
    SUBDOMAIN_SPAM_SCORE = 67108864
    HTTP_STATUS_CODE = 536870912
    LINKS_TO_SUBDOMAIN = 4294967296
    LINKS_TO_ROOT_DOMAIN = 8589934592
    ROOT_DOMAINS_LINKING_TO_SUBDOMAIN = 17179869184
    PAGE_AUTHORITY = 34359738368
    DOMAIN_AUTHORITY = 68719476736


# 103079217156: canonical URL, links, page authority, domain authority
DEFAULT_COLS = int(
    Cols.CANONICAL_URL | Cols.LINKS | Cols.PAGE_AUTHORITY | Cols.DOMAIN_AUTHORITY
)


class URLMetrics(BaseModel):
    """
    Metrics for one URL as reported by the API.

    Only the four default-column fields are always present. The rest are
    populated when the matching ``Cols`` bits are requested and stay
    ``None`` otherwise.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    page_authority: float = Field(0.0, alias="upa")
    domain_authority: float = Field(0.0, alias="pda")
    links: float = Field(0.0, alias="uid")
    url: str = Field("", alias="uu")

    title: Optional[str] = Field(None, alias="ut")
    subdomain: Optional[str] = Field(None, alias="ufq")
    root_domain: Optional[str] = Field(None, alias="upl")
    external_equity_links: Optional[float] = Field(None, alias="ueid")
    subdomain_external_links: Optional[float] = Field(None, alias="feid")
    root_domain_external_links: Optional[float] = Field(None, alias="peid")
    equity_links: Optional[float] = Field(None, alias="ujid")
    subdomains_linking: Optional[float] = Field(None, alias="uifq")
    root_domains_linking: Optional[float] = Field(None, alias="uipl")
    subdomain_subdomains_linking: Optional[float] = Field(None, alias="fid")
    root_domain_root_domains_linking: Optional[float] = Field(None, alias="pid")
    mozrank_url: Optional[float] = Field(None, alias="umrp")
    mozrank_url_raw: Optional[float] = Field(None, alias="umrr")
    mozrank_subdomain: Optional[float] = Field(None, alias="fmrp")
    mozrank_subdomain_raw: Optional[float] = Field(None, alias="fmrr")
    mozrank_root_domain: Optional[float] = Field(None, alias="pmrp")
    mozrank_root_domain_raw: Optional[float] = Field(None, alias="pmrr")
    moztrust: Optional[float] = Field(None, alias="utrp")
    moztrust_raw: Optional[float] = Field(None, alias="utrr")
    moztrust_subdomain: Optional[float] = Field(None, alias="ftrp")
    moztrust_subdomain_raw: Optional[float] = Field(None, alias="ftrr")
    moztrust_root_domain: Optional[float] = Field(None, alias="ptrp")
    moztrust_root_domain_raw: Optional[float] = Field(None, alias="ptrr")
    mozrank_external_equity: Optional[float] = Field(None, alias="uemrp")
    mozrank_external_equity_raw: Optional[float] = Field(None, alias="uemrr")
    mozrank_subdomain_external_equity: Optional[float] = Field(None, alias="fejp")
    mozrank_subdomain_external_equity_raw: Optional[float] = Field(None, alias="fejr")
    mozrank_root_domain_external_equity: Optional[float] = Field(None, alias="pejp")
    mozrank_root_domain_external_equity_raw: Optional[float] = Field(None, alias="pejr")
    mozrank_subdomain_combined: Optional[float] = Field(None, alias="pjp")
    mozrank_subdomain_combined_raw: Optional[float] = Field(None, alias="pjr")
    mozrank_root_domain_combined: Optional[float] = Field(None, alias="fjp")
    mozrank_root_domain_combined_raw: Optional[float] = Field(None, alias="fjr")
    subdomain_spam_score: Optional[float] = Field(None, alias="fspsc")
    http_status_code: Optional[float] = Field(None, alias="us")
    links_to_subdomain: Optional[float] = Field(None, alias="fuid")
    links_to_root_domain: Optional[float] = Field(None, alias="puid")
    root_domains_linking_to_subdomain: Optional[float] = Field(None, alias="fipl")

    @field_validator("page_authority", "domain_authority", "links", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("url", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value
