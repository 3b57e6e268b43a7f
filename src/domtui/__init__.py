"""domtui: declarative terminal UI with tag-keyed widget state."""

# Clipboard
from domtui.clipboard import (
    Clipboard,
    ClipboardProvider,
    CommandProvider,
    get_clipboard,
    set_clipboard,
    system_provider,
)

# Errors
from domtui.errors import (
    ConstructionError,
    DomTuiError,
    DuplicateTagError,
    TerminalIOError,
    TooManyChildrenError,
)

# Events
from domtui.events import (
    Event,
    KeyEvent,
    MouseEvent,
    PasteEvent,
    QuitEvent,
    ResizeEvent,
)

# Focus
from domtui.focus import FocusManager

# Geometry
from domtui.geometry import Orientation, Rect, Size

# Keybindings
from domtui.keybindings import (
    DEFAULT_KEYBINDINGS,
    Action,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)

# Keyboard input handling
from domtui.keys import KeyId, matches_key, parse_key

# Layout
from domtui.layout import Placement, distribute, layout

# View tree
from domtui.nodes import (
    MAX_CHILDREN,
    Container,
    Leaf,
    Node,
    Tag,
    hstack,
    leaf,
    vstack,
)

# Identity registry
from domtui.registry import Frame, IdentityRegistry

# Screen and event loop
from domtui.screen import Screen, ScreenOptions, run

# Terminal interface and implementations
from domtui.terminal import ProcessTerminal, Terminal, terminal_session

# Utilities
from domtui.utils import truncate_to_width, visible_width, wrap_text

# Widgets
from domtui.widgets import (
    Empty,
    InputField,
    InputFieldState,
    Paragraph,
    StaticWidget,
    Widget,
)

__all__ = [
    # Clipboard
    "Clipboard",
    "ClipboardProvider",
    "CommandProvider",
    "get_clipboard",
    "set_clipboard",
    "system_provider",
    # Errors
    "ConstructionError",
    "DomTuiError",
    "DuplicateTagError",
    "TerminalIOError",
    "TooManyChildrenError",
    # Events
    "Event",
    "KeyEvent",
    "MouseEvent",
    "PasteEvent",
    "QuitEvent",
    "ResizeEvent",
    # Focus
    "FocusManager",
    # Geometry
    "Orientation",
    "Rect",
    "Size",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "Action",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "KeyId",
    "matches_key",
    "parse_key",
    # Layout
    "Placement",
    "distribute",
    "layout",
    # View tree
    "MAX_CHILDREN",
    "Container",
    "Leaf",
    "Node",
    "Tag",
    "hstack",
    "leaf",
    "vstack",
    # Registry
    "Frame",
    "IdentityRegistry",
    # Screen
    "Screen",
    "ScreenOptions",
    "run",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "terminal_session",
    # Utilities
    "truncate_to_width",
    "visible_width",
    "wrap_text",
    # Widgets
    "Empty",
    "InputField",
    "InputFieldState",
    "Paragraph",
    "StaticWidget",
    "Widget",
]
