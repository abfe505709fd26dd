"""Blocs composants — card, FAQ, témoignage, pricing."""
from typing import List

from .base import BlockDefinition, BlockProps

_BORDERED = {"borderWidth": 1, "borderStyle": "solid", "borderColor": "#e5e7eb"}


class FAQProps(BlockProps):
    question: str = "Frequently Asked Question?"
    answer: str = "This is the answer to the question."


class TestimonialProps(BlockProps):
    quote: str = "This product changed my life!"
    author: str = "John Doe"
    role: str = "CEO, Company"
    avatar: str = ""


class PricingProps(BlockProps):
    title: str = "Pro Plan"
    price: str = "$99"
    period: str = "/month"
    features: str = "Feature 1,Feature 2,Feature 3"
    button_text: str = "Get Started"
    button_link: str = ""

    def feature_list(self) -> List[str]:
        return [f.strip() for f in self.features.split(",") if f.strip()]


DEFINITIONS = [
    BlockDefinition(
        type="CARD", category="Components", label="Card",
        default_styles={"display": "flex", "flexDirection": "column", "gap": "16px", "padding": 24,
                        "backgroundColor": "#ffffff", "borderRadius": 8, **_BORDERED,
                        "boxShadow": "0 1px 3px rgba(0,0,0,0.1)"},
        can_have_children=True,
    ),
    BlockDefinition(
        type="FAQ", category="Components", label="FAQ Item",
        props_model=FAQProps,
        default_styles={"padding": 16, "backgroundColor": "#ffffff", "borderRadius": 8, **_BORDERED},
    ),
    BlockDefinition(
        type="TESTIMONIAL", category="Components", label="Testimonial",
        props_model=TestimonialProps,
        default_styles={"padding": 24, "backgroundColor": "#ffffff", "borderRadius": 8, **_BORDERED},
    ),
    BlockDefinition(
        type="PRICING", category="Components", label="Pricing Card",
        props_model=PricingProps,
        default_styles={"padding": 32, "backgroundColor": "#ffffff", "borderRadius": 12,
                        "borderWidth": 2, "borderStyle": "solid", "borderColor": "#e5e7eb", "textAlign": "center"},
    ),
]
