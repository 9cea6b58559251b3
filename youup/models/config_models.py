"""Pydantic model for the endpoints configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from youup.models.constants import DEFAULT_DNS_TEST_DOMAINS, DEFAULT_ENDPOINTS


class EndpointsConfiguration(BaseModel):
    """Internet test endpoints and DNS test domains, in probing order.

    Serialized with the camelCase keys used by the configuration file::

        {
          "endpoints": ["https://dns.google", "https://1.1.1.1"],
          "dnsTestDomains": ["google.com", "cloudflare.com"]
        }

    ``dnsTestDomains`` is optional; files written before DNS checks existed
    only carry ``endpoints``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoints: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENDPOINTS),
        description="Internet test URLs, tried in order",
    )
    dns_test_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DNS_TEST_DOMAINS),
        alias="dnsTestDomains",
        description="Domains whose resolution is tested, tried in order",
    )

    @field_validator("endpoints", "dns_test_domains")
    @classmethod
    def _strip_blank(cls, values: list[str]) -> list[str]:
        return [value.strip() for value in values if value and value.strip()]

    @field_validator("dns_test_domains")
    @classmethod
    def _default_domains_when_empty(cls, values: list[str]) -> list[str]:
        return values or list(DEFAULT_DNS_TEST_DOMAINS)

    @classmethod
    def default(cls) -> EndpointsConfiguration:
        """Built-in configuration used when no usable file exists."""
        return cls()

    def to_file_dict(self) -> dict[str, list[str]]:
        """Return the on-disk JSON representation."""
        return self.model_dump(by_alias=True)
