"""Lightweight wrapper around PokeAPI for resolving species dex data."""

from __future__ import annotations

import re
import time
from typing import Any, Dict, Optional

import requests

from ..models import SpeciesEntry


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokeAPIClient:
    """Small helper client with naive in-memory caching."""

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        cache_ttl: int = 600,
        timeout: int = 10,
        user_agent: str = "poke-usage/0.1 (+https://github.com/)",
    ) -> None:
        self.session = session or requests.Session()
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_species(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the ``pokemon-species`` payload, or None for unknown species."""

        slug = self._slugify_name(self._base_species(name))
        if not slug:
            return None
        return self._get_json(f"pokemon-species/{slug}", allow_404=True)

    def get_species_entry(self, name: str) -> Optional[SpeciesEntry]:
        payload = self.get_species(name)
        if payload is None or payload.get("id") is None:
            return None
        return SpeciesEntry(
            name=name,
            dex_number=str(payload["id"]),
            restricted=bool(payload.get("is_legendary", False)),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str, *, allow_404: bool = False) -> Optional[Dict[str, Any]]:
        url = self._build_url(endpoint)
        now = time.time()
        cached = self._cache.get(url)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404 and allow_404:
                self._cache[url] = (now, None)
                return None
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PokeAPIClientError(str(exc)) from exc

        payload = response.json()
        self._cache[url] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip("/")
        return f"{self.BASE_URL}/{endpoint}"

    @staticmethod
    def _base_species(name: str) -> str:
        # Species endpoints key on the base form: "Urshifu-Rapid-Strike" -> "Urshifu".
        # Hyphenated base names ("Ho-Oh", "Chien-Pao") are kept intact.
        cleaned = name.strip()
        if cleaned.lower() in HYPHENATED_SPECIES:
            return cleaned
        for known in HYPHENATED_SPECIES:
            if cleaned.lower().startswith(known + "-"):
                return cleaned[: len(known)]
        return cleaned.split("-", 1)[0]

    @staticmethod
    def _slugify_name(name: str) -> str:
        slug = name.strip().lower()
        slug = re.sub(r"[\s\.]+", "-", slug)
        slug = slug.replace("'", "")
        slug = slug.replace(":", "")
        slug = slug.replace("%", "")
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug.strip("-")


HYPHENATED_SPECIES = (
    "ho-oh",
    "porygon-z",
    "jangmo-o",
    "hakamo-o",
    "kommo-o",
    "wo-chien",
    "chien-pao",
    "ting-lu",
    "chi-yu",
)
