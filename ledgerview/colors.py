"""
Color palette and ordinal color scales for the charts.
"""

from typing import Dict, Iterable, List

from plotly.colors import qualitative


COLORS = {
    "gain": "#48c78e",
    "loss": "#f14668",
    "loss_text": "#cc0f35",
    "income": "#3e8ed0",
    "expenses": "#f14668",
    "tax": "#ffa600",
    "white": "#ffffff",
    "grid": "#e5e5e5",
    "text": "#4a4a4a",
}

# Hex-only palettes so with_alpha and darken can parse them
PALETTE: List[str] = list(qualitative.Plotly) + list(qualitative.T10) + list(qualitative.Alphabet)


class ColorScale:
    """Ordinal scale: the n-th distinct key gets the n-th palette color"""

    def __init__(self, keys: Iterable[str] = (), palette: List[str] = None):
        self.palette = palette or PALETTE
        self._mapping: Dict[str, str] = {}
        for key in keys:
            self(key)

    def __call__(self, key: str) -> str:
        if key not in self._mapping:
            self._mapping[key] = self.palette[len(self._mapping) % len(self.palette)]
        return self._mapping[key]

    @property
    def domain(self) -> List[str]:
        return list(self._mapping)


def generate_color_scheme(keys: Iterable[str]) -> ColorScale:
    return ColorScale(keys)


def _rgb(hex_color: str):
    value = hex_color.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def with_alpha(hex_color: str, alpha: float) -> str:
    r, g, b = _rgb(hex_color)
    return f"rgba({r},{g},{b},{alpha:.3f})"


def darken(hex_color: str, amount: float = 0.8) -> str:
    """Scale each channel down; amount 1.0 halves the brightness"""
    factor = max(0.0, 1.0 - amount / 2)
    r, g, b = (int(c * factor) for c in _rgb(hex_color))
    return f"#{r:02x}{g:02x}{b:02x}"
