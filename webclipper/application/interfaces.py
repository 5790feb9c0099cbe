# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class GitHubIdentity:
    id: str
    login: str


class GitHubOAuthPort(Protocol):
    """Upstream leg of the GitHub login; failures raise ``OAuthError``."""

    def authorize_url(self, *, state: str, redirect_uri: str) -> str: ...

    def exchange_code(self, code: str) -> str: ...

    def fetch_user(self, access_token: str) -> GitHubIdentity: ...
