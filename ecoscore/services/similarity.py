"""
Score de similarité entre un produit de référence et un candidat.

    similarity = 0.4 * eco + 0.4 * prix + 0.2 * catégorie

Les pondérations sont une politique produit (impact écologique et prix
comparables d'abord, catégorie ensuite), pas une valeur dérivée des données.
"""

from typing import Optional
import re

from ecoscore.schemas.product import ProductRecord
from ecoscore.services.open_food_facts import DEFAULT_ECO_SCORE

ECO_SCORE_WEIGHT = 0.4
PRICE_WEIGHT = 0.4
CATEGORY_WEIGHT = 0.2

# Contribution d'un terme quand l'information manque ou ne recoupe pas :
# ni rapprochement ni pénalité
NEUTRAL_SIMILARITY = 0.5
CATEGORY_MATCH_SIMILARITY = 1.0

_PRICE_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")


def parse_price(price: Optional[str]) -> Optional[float]:
    """Premier nombre décimal trouvé dans la chaîne ("3,99 €" -> 3.99)"""
    if not price:
        return None

    match = _PRICE_PATTERN.search(price)
    if not match:
        return None

    return float(match.group(0).replace(",", "."))


def eco_score_or_default(product: ProductRecord) -> int:
    if product.eco_score is None:
        return DEFAULT_ECO_SCORE
    return product.eco_score


def eco_score_similarity(reference: ProductRecord, candidate: ProductRecord) -> float:
    difference = abs(eco_score_or_default(candidate) - eco_score_or_default(reference))
    return max(0.0, 1 - difference / 100)


def price_similarity(reference: ProductRecord, candidate: ProductRecord) -> float:
    reference_price = parse_price(reference.price)
    candidate_price = parse_price(candidate.price)

    if not reference_price or not candidate_price:
        return NEUTRAL_SIMILARITY

    return min(reference_price, candidate_price) / max(reference_price, candidate_price)


def category_similarity(reference: ProductRecord, candidate: ProductRecord) -> float:
    """
    1.0 si la catégorie de référence contient le premier segment de celle du
    candidat, sinon neutre. Le sens du test est fixe : le score n'est pas
    symétrique.
    """
    if not reference.category or not candidate.category:
        return NEUTRAL_SIMILARITY

    first_segment = candidate.category.lower().split(",")[0].strip()
    if first_segment and first_segment in reference.category.lower():
        return CATEGORY_MATCH_SIMILARITY

    return NEUTRAL_SIMILARITY


def calculate_similarity(reference: ProductRecord, candidate: ProductRecord) -> float:
    """Similarité dans [0, 1], toujours calculable"""
    return (
        ECO_SCORE_WEIGHT * eco_score_similarity(reference, candidate)
        + PRICE_WEIGHT * price_similarity(reference, candidate)
        + CATEGORY_WEIGHT * category_similarity(reference, candidate)
    )
