"""Fixed settings for the TrustedForm certificates client refresh."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import MissingCredential

LIBRARY = "Soenneker.TrustedForm.Certificates.OpenApiClient"
TOKEN_ENV_VAR = "GH__TOKEN"


@dataclass(frozen=True)
class RefreshSettings:
    """Constants describing the refresh target and how it is published."""

    docs_url: str = "https://activeprospect.redoc.ly/docs/trustedform/api/v4.0/overview/"
    download_selector: str = "a[download='swagger.json']"
    navigation_timeout_ms: int = 60_000
    library: str = LIBRARY
    repository_owner: str = "soenneker"
    client_name: str = "TrustedFormCertificatesOpenApiClient"
    spec_file_name: str = "swagger.json"
    source_dir_name: str = "src"
    descriptor_extension: str = ".csproj"
    generator_package: str = "Microsoft.OpenApi.Kiota"
    generator_language: str = "CSharp"
    build_configuration: str = "Release"
    commit_message: str = "Automated Update"
    author_name: str = "Jake Soenneker"
    author_email: str = "jake@soenneker.com"
    token_env_var: str = TOKEN_ENV_VAR

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.repository_owner}/{self.library.lower()}"

    @property
    def project_file_name(self) -> str:
        return f"{self.library}{self.descriptor_extension}"


def require_env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the value of ``name`` or raise :class:`MissingCredential`."""
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None or not value.strip():
        raise MissingCredential(name)
    return value.strip()


__all__ = ["LIBRARY", "RefreshSettings", "TOKEN_ENV_VAR", "require_env"]
