"""
Intégration Open Food Facts : lecture d'une fiche par code-barres,
recherche plein texte et envoi de contributions.

Toute réponse JSON est validée dans les modèles OpenFoodFacts* avant
d'être convertie en ProductRecord ; aucun dict brut ne sort de ce module.
"""

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote
import math
import logging

import httpx
from pydantic import ValidationError

from ecoscore.core.config import settings
from ecoscore.schemas.product import (
    OpenFoodFactsProduct,
    OpenFoodFactsProductEnvelope,
    OpenFoodFactsSearchEnvelope,
    ProductRecord,
)
from ecoscore.utils.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)

# Budgets imposés par le schéma de la table products
MAX_NAME_LENGTH = 255
MAX_BRAND_LENGTH = 255
MAX_CATEGORY_LENGTH = 255
MAX_IMAGE_URL_LENGTH = 500
MAX_COUNTRY_LENGTH = 100
MAX_GRADE_LENGTH = 10

# Valeurs substituées quand Open Food Facts ne fournit pas d'eco-score
DEFAULT_ECO_SCORE = 50
DEFAULT_ECO_SCORE_GRADE = "C"
UNKNOWN_PRODUCT_NAME = "Unknown Product"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    if not value:
        return None
    return value[:max_length]


def calculate_environmental_footprint(eco_score: float) -> int:
    """Non borné : peut dépasser 100 pour un eco-score supérieur à 83"""
    return round_half_up(eco_score * 1.2)


def calculate_packaging_sustainability(eco_score: float) -> int:
    return round_half_up(max(0, min(100, eco_score + 10)))


def calculate_carbon_impact(eco_score: float) -> int:
    return round_half_up(100 - eco_score)


def normalize_eco_score(raw_score: Optional[float]) -> int:
    if raw_score is None:
        return DEFAULT_ECO_SCORE
    return max(0, min(100, round_half_up(raw_score)))


def normalize_product(
    raw: OpenFoodFactsProduct, barcode: Optional[str] = None
) -> ProductRecord:
    """Convertit une fiche Open Food Facts en ProductRecord stockable"""
    eco_score = normalize_eco_score(raw.ecoscore_score)
    grade = raw.ecoscore_grade or DEFAULT_ECO_SCORE_GRADE

    return ProductRecord(
        barcode=barcode or raw.code,
        name=truncate(raw.product_name or UNKNOWN_PRODUCT_NAME, MAX_NAME_LENGTH)
        or UNKNOWN_PRODUCT_NAME,
        brand=truncate(raw.brands, MAX_BRAND_LENGTH),
        category=truncate(raw.categories, MAX_CATEGORY_LENGTH),
        eco_score=eco_score,
        eco_score_grade=truncate(grade.upper(), MAX_GRADE_LENGTH)
        or DEFAULT_ECO_SCORE_GRADE,
        environmental_footprint=calculate_environmental_footprint(eco_score),
        packaging_sustainability=calculate_packaging_sustainability(eco_score),
        carbon_impact=calculate_carbon_impact(eco_score),
        image_url=truncate(raw.image_url, MAX_IMAGE_URL_LENGTH),
        price=raw.price or None,
        country=truncate(raw.countries, MAX_COUNTRY_LENGTH),
    )


def _has_usable_identity(raw: OpenFoodFactsProduct) -> bool:
    return bool(raw.code and raw.code.strip()) and bool(
        raw.product_name and raw.product_name.strip()
    )


class OpenFoodFactsClient:
    """
    Client asynchrone Open Food Facts

    Construit une fois au démarrage (lifespan) puis injecté dans les routes.
    Aucun retry interne : les erreurs de transport remontent en
    SourceUnavailableError et l'appelant décide.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        self.http = http_client
        self.base_url = (base_url or settings.OFF_BASE_URL).rstrip("/")
        self.user_agent = user_agent or settings.OFF_USER_AGENT

    @classmethod
    def from_settings(cls) -> "OpenFoodFactsClient":
        http_client = httpx.AsyncClient(timeout=settings.OFF_TIMEOUT_SECONDS)
        return cls(http_client)

    async def aclose(self):
        await self.http.aclose()

    @property
    def _headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent}

    async def fetch_by_barcode(self, barcode: str) -> Optional[ProductRecord]:
        """
        Récupère une fiche produit

        Returns:
            ProductRecord, ou None si Open Food Facts ne connaît pas le code
            (réponse non-2xx ou enveloppe sans produit)

        Raises:
            SourceUnavailableError: erreur réseau ou réponse illisible
        """
        url = f"{self.base_url}/api/v0/product/{quote(barcode, safe='')}.json"

        try:
            response = await self.http.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error(f"Open Food Facts fetch failed for {barcode}: {e}")
            raise SourceUnavailableError("fetch", str(e)) from e

        if not response.is_success:
            logger.warning(
                f"Product not found upstream: {barcode} (HTTP {response.status_code})"
            )
            return None

        try:
            envelope = OpenFoodFactsProductEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable Open Food Facts payload for {barcode}: {e}")
            raise SourceUnavailableError("fetch", f"invalid payload: {e}") from e

        if envelope.product is None:
            logger.info(f"Open Food Facts has no product for {barcode}")
            return None

        return normalize_product(envelope.product, barcode=barcode)

    async def search_by_text(self, query: str, limit: int = 10) -> List[ProductRecord]:
        """Recherche plein texte, au plus `limit` résultats exploitables"""
        if limit <= 0:
            return []

        params = {"search_terms": query, "json": 1, "page_size": limit}

        try:
            response = await self.http.get(
                f"{self.base_url}/cgi/search.pl", params=params, headers=self._headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Open Food Facts search failed for '{query}': {e}")
            raise SourceUnavailableError("search", str(e)) from e

        if not response.is_success:
            logger.error(
                f"Open Food Facts search for '{query}' returned HTTP {response.status_code}"
            )
            raise SourceUnavailableError("search", f"HTTP {response.status_code}")

        try:
            envelope = OpenFoodFactsSearchEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable Open Food Facts search payload: {e}")
            raise SourceUnavailableError("search", f"invalid payload: {e}") from e

        results = []
        for item in envelope.products:
            try:
                raw = OpenFoodFactsProduct.model_validate(item)
            except ValidationError:
                logger.debug(f"Skipping malformed search entry: {item!r:.80}")
                continue

            if not _has_usable_identity(raw):
                continue

            results.append(normalize_product(raw))
            if len(results) >= limit:
                break

        logger.info(f"Open Food Facts search '{query}': {len(results)} products")
        return results

    async def submit_product(self, fields: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        """
        Envoie une fiche produit à l'API d'édition

        Returns:
            (code HTTP, corps JSON ou {} si illisible)
        """
        data = dict(fields)
        if settings.OFF_CONTRIBUTOR_USER_ID and settings.OFF_CONTRIBUTOR_PASSWORD:
            data["user_id"] = settings.OFF_CONTRIBUTOR_USER_ID
            data["password"] = settings.OFF_CONTRIBUTOR_PASSWORD

        try:
            response = await self.http.post(
                f"{self.base_url}/cgi/product_jqm2.pl", data=data, headers=self._headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Open Food Facts contribution failed: {e}")
            raise SourceUnavailableError("contribution", str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not isinstance(payload, dict):
            payload = {}

        return response.status_code, payload
