"""Layout and rendering constants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 160
    node_height: float = 70
    h_gap: float = 20  # between siblings
    v_gap: float = 80  # between generations
    margin: float = 40
    tree_gap_factor: float = 3  # gap between root trees, in units of h_gap

    @property
    def tree_gap(self) -> float:
        return self.h_gap * self.tree_gap_factor


DEFAULT_CONFIG = LayoutConfig()

# Rendering
GENDER_COLORS = {
    "male": ("lightblue", "steelblue"),
    "female": ("lightpink", "palevioletred"),
    "other": ("lavender", "mediumpurple"),
    None: ("whitesmoke", "darkgray"),
}
CONNECTOR_COLOR = "#9CA3AF"
DPI = 100
EMPTY_MESSAGE = "No people in the family tree yet."
