"""Built-in leaf widgets."""

from domtui.widgets.base import StaticWidget, Widget
from domtui.widgets.empty import Empty
from domtui.widgets.input_field import InputField, InputFieldState
from domtui.widgets.paragraph import Paragraph

__all__ = [
    "Empty",
    "InputField",
    "InputFieldState",
    "Paragraph",
    "StaticWidget",
    "Widget",
]
