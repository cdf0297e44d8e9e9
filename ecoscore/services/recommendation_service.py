from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from google import genai
from google.genai import types

from ecoscore.core.config import settings
from ecoscore.models.product import Product

logger = logging.getLogger(__name__)

NO_FAVORITES_MESSAGE = (
    "Start by saving your favorite products to get personalized recommendations!"
)
RECOMMENDATIONS_UNAVAILABLE = "Unable to generate recommendations at this time."
TIPS_UNAVAILABLE = "Unable to generate tips at this time."
ANALYSIS_UNAVAILABLE = "Unable to analyze product at this time."
COMPARISON_UNAVAILABLE = "Unable to compare products at this time."


def _score(value: Optional[int]) -> str:
    return f"{value}/100" if value is not None else "N/A"


def _describe_product(product: Product) -> str:
    return (
        f"Product: {product.name}\n"
        f"- Brand: {product.brand or 'Unknown'}\n"
        f"- Category: {product.category or 'Unknown'}\n"
        f"- Eco-Score: {_score(product.eco_score)}\n"
        f"- Environmental Footprint: {_score(product.environmental_footprint)}\n"
        f"- Packaging: {_score(product.packaging_sustainability)}\n"
        f"- Carbon: {_score(product.carbon_impact)}"
    )


class RecommendationService:
    """Textes de conseil générés par Gemini ; None quand le modèle échoue"""

    def __init__(self, db: Session):
        self.db = db
        self.model = settings.GEMINI_MODEL
        self.client = (
            genai.Client(api_key=settings.GEMINI_API_KEY)
            if settings.GEMINI_API_KEY
            else None
        )

    async def _generate(self, system_instruction: str, prompt: str) -> Optional[str]:
        if self.client is None:
            logger.warning("GEMINI_API_KEY not configured, skipping generation")
            return None

        try:
            config = types.GenerateContentConfig(system_instruction=system_instruction)
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini generation failed: {e}", exc_info=True)
            return None

        text = response.text
        return text if isinstance(text, str) and text.strip() else None

    async def personalized(self, favorites: List[Product]) -> Optional[str]:
        summary = "\n".join(
            f"- {p.name} (Brand: {p.brand or 'Unknown'}, Eco-Score: {_score(p.eco_score)})"
            for p in favorites
        )
        average = round(sum(p.eco_score or 0 for p in favorites) / len(favorites))

        prompt = (
            f"Here are my saved products:\n{summary}\n\n"
            f"My average eco-score is {average}/100.\n\n"
            "Please provide:\n"
            "1. A brief analysis of my current shopping patterns\n"
            "2. 2-3 specific eco-friendly shopping tips based on my preferences\n"
            "3. Suggestions for sustainable alternatives I should consider\n\n"
            "Keep the response friendly and motivating!"
        )
        return await self._generate(
            "You are an eco-conscious shopping advisor. Analyze the user's saved "
            "products and provide personalized recommendations for sustainable "
            "shopping. Keep recommendations concise and actionable.",
            prompt,
        )

    async def shopping_tips(self) -> Optional[str]:
        return await self._generate(
            "You are an environmental sustainability expert. Provide practical, "
            "actionable eco-friendly shopping tips. Focus on high-impact changes.",
            "Generate 5 practical eco-friendly shopping tips that can help reduce "
            "environmental impact. Format as a numbered list with brief explanations.",
        )

    async def analyze_product(self, product: Product) -> Optional[str]:
        prompt = (
            f"Analyze this product's sustainability:\n{_describe_product(product)}\n\n"
            "Provide a brief analysis (2-3 sentences) of what this score means for "
            "the environment and suggest one improvement the manufacturer could make."
        )
        return await self._generate(
            "You are a sustainability analyst. Explain a product's environmental "
            "impact from its eco-score and components, accessible to consumers.",
            prompt,
        )

    async def compare_products(self, first: Product, second: Product) -> Optional[str]:
        prompt = (
            "Compare the sustainability of these two products:\n\n"
            f"{_describe_product(first)}\n\n{_describe_product(second)}\n\n"
            "Provide a brief comparison (2-3 sentences) explaining which is more "
            "sustainable and why."
        )
        return await self._generate(
            "You are a sustainability comparison expert. Help consumers understand "
            "which product is more eco-friendly and why. Be clear and objective.",
            prompt,
        )
