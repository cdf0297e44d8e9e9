from typing import Any, Dict
import logging

from ecoscore.core.config import settings
from ecoscore.schemas.contribution import ContributionRequest, ContributionResponse
from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.utils.exceptions import SourceUnavailableError
from ecoscore.utils.validators import clean_barcode, validate_barcode

logger = logging.getLogger(__name__)


def product_page_url(barcode: str) -> str:
    return f"{settings.OFF_BASE_URL}/product/{clean_barcode(barcode)}"


def contribution_url(barcode: str) -> str:
    """Formulaire de saisie manuelle sur Open Food Facts"""
    return (
        f"{settings.OFF_BASE_URL}/cgi/product.pl"
        f"?action=process&type=add&code={clean_barcode(barcode)}"
    )


class ContributionService:
    def __init__(self, source: OpenFoodFactsClient):
        self.source = source

    @staticmethod
    def build_form(request: ContributionRequest) -> Dict[str, Any]:
        form = {
            "code": clean_barcode(request.barcode),
            "product_name": request.product_name.strip(),
        }
        optional_fields = {
            "brands": request.brand,
            "categories": request.category,
            "ingredients_text": request.ingredients,
            "nutrition_facts": request.nutrition_facts,
            "comment": request.comment,
        }
        form.update({k: v for k, v in optional_fields.items() if v})
        return form

    async def submit(self, request: ContributionRequest) -> ContributionResponse:
        if not validate_barcode(request.barcode):
            return ContributionResponse(
                success=False,
                message="Invalid barcode format. Please check the barcode and try again.",
                error="INVALID_BARCODE",
            )

        if not request.product_name or not request.product_name.strip():
            return ContributionResponse(
                success=False,
                message="Product name is required.",
                error="MISSING_PRODUCT_NAME",
            )

        try:
            status_code, payload = await self.source.submit_product(
                self.build_form(request)
            )
        except SourceUnavailableError as e:
            return ContributionResponse(
                success=False,
                message="An error occurred while submitting your contribution. Please try again.",
                error=e.reason,
            )

        if not 200 <= status_code < 300:
            return ContributionResponse(
                success=False,
                message="Failed to submit contribution. Please try again later.",
                error=f"HTTP_{status_code}",
            )

        upstream_status = str(payload.get("status", payload.get("code", "")))

        if upstream_status == "0":
            logger.info(f"Contribution accepted for {request.barcode}")
            return ContributionResponse(
                success=True,
                message=(
                    "Thank you! Your product data has been submitted to Open Food Facts. "
                    "It may take a few minutes to appear in the database."
                ),
                off_url=product_page_url(request.barcode),
            )

        if upstream_status == "1":
            return ContributionResponse(
                success=True,
                message="Product already exists in Open Food Facts. Your contribution has been recorded.",
                off_url=product_page_url(request.barcode),
            )

        upstream_error = payload.get("error")
        if not isinstance(upstream_error, str) or not upstream_error:
            upstream_error = "Failed to submit contribution. Please try again."

        return ContributionResponse(
            success=False,
            message=upstream_error,
            error=upstream_status or "UNKNOWN_ERROR",
        )
