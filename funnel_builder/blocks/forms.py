"""Blocs formulaire — champs, bouton, form (enfants restreints)."""
from typing import List, Literal, Optional

from .base import BlockDefinition, BlockProps

_FIELD_STYLES = {
    "width": "100%", "padding": 12, "fontSize": 16,
    "borderWidth": 1, "borderStyle": "solid", "borderColor": "#cccccc", "borderRadius": 4,
}


class InputProps(BlockProps):
    type: Literal["text", "email", "password", "number", "tel", "url"] = "text"
    placeholder: str = "Enter text..."
    name: str = "input"
    required: bool = False


class TextareaProps(BlockProps):
    placeholder: str = "Enter your message..."
    name: str = "message"
    rows: int = 4
    required: bool = False


class SelectProps(BlockProps):
    name: str = "select"
    options: str = "Option 1,Option 2,Option 3"
    required: bool = False

    def option_list(self) -> List[str]:
        return [opt.strip() for opt in self.options.split(",") if opt.strip()]


class CheckboxProps(BlockProps):
    name: str = "checkbox"
    label: str = "I agree to the terms and conditions"
    required: bool = False


class ButtonProps(BlockProps):
    text: str = "Click Me"
    type: Literal["button", "submit", "reset"] = "button"
    link: str = ""
    href: Optional[str] = None

    @property
    def target_url(self) -> str:
        return self.link or self.href or ""


class FormProps(BlockProps):
    name: str = "contact-form"
    submit_text: str = "Submit"
    action: str = "#"
    method: Literal["POST", "GET", "post", "get"] = "POST"


DEFINITIONS = [
    BlockDefinition(type="INPUT", category="Forms", label="Input",
                    props_model=InputProps, default_styles=dict(_FIELD_STYLES)),
    BlockDefinition(type="TEXTAREA", category="Forms", label="Text Area",
                    props_model=TextareaProps, default_styles=dict(_FIELD_STYLES)),
    BlockDefinition(type="SELECT", category="Forms", label="Select",
                    props_model=SelectProps, default_styles=dict(_FIELD_STYLES)),
    BlockDefinition(
        type="CHECKBOX", category="Forms", label="Checkbox",
        props_model=CheckboxProps,
        default_styles={"display": "flex", "alignItems": "center", "gap": 8, "fontSize": 16},
    ),
    BlockDefinition(
        type="BUTTON", category="Forms", label="Button",
        props_model=ButtonProps,
        default_styles={"padding": 16, "fontSize": 16, "fontWeight": 600, "color": "#ffffff",
                        "backgroundColor": "#3b82f6", "borderRadius": 8, "border": "none", "cursor": "pointer"},
    ),
    BlockDefinition(
        type="FORM", category="Forms", label="Form",
        props_model=FormProps,
        default_styles={"display": "flex", "flexDirection": "column", "gap": "16px", "width": "100%",
                        "padding": 24, "backgroundColor": "#f9fafb", "borderRadius": 8},
        can_have_children=True,
        allowed_children=["INPUT", "TEXTAREA", "SELECT", "CHECKBOX", "BUTTON", "HEADING", "PARAGRAPH"],
    ),
]
