"""CSS color parsing shared by the page color aggregator and the page tree.

>>> to_hex('rgb(255, 87, 51)')
'#FF5733'
>>> to_hex('#0f0')
'#00FF00'
>>> to_hex('rebeccapurple')
'#663399'
>>> to_hex('rgba(0, 0, 0, 0)')
'#000000'
>>> is_fully_transparent('rgba(0, 0, 0, 0)')
True
>>> to_hex('url(#gradient)') is None
True
"""

import colorsys
import math
import re
from typing import Optional, Tuple

# Colors that carry no brand signal once alpha is dropped
NEUTRAL_HEXES = frozenset({"#FFFFFF", "#000000"})

NAMED_COLORS = {
    "transparent": "#00000000",
    "aliceblue": "#F0F8FF", "antiquewhite": "#FAEBD7", "aqua": "#00FFFF", "aquamarine": "#7FFFD4",
    "azure": "#F0FFFF", "beige": "#F5F5DC", "bisque": "#FFE4C4", "black": "#000000",
    "blanchedalmond": "#FFEBCD", "blue": "#0000FF", "blueviolet": "#8A2BE2", "brown": "#A52A2A",
    "burlywood": "#DEB887", "cadetblue": "#5F9EA0", "chartreuse": "#7FFF00", "chocolate": "#D2691E",
    "coral": "#FF7F50", "cornflowerblue": "#6495ED", "cornsilk": "#FFF8DC", "crimson": "#DC143C",
    "cyan": "#00FFFF", "darkblue": "#00008B", "darkcyan": "#008B8B", "darkgoldenrod": "#B8860B",
    "darkgray": "#A9A9A9", "darkgreen": "#006400", "darkgrey": "#A9A9A9", "darkkhaki": "#BDB76B",
    "darkmagenta": "#8B008B", "darkolivegreen": "#556B2F", "darkorange": "#FF8C00", "darkorchid": "#9932CC",
    "darkred": "#8B0000", "darksalmon": "#E9967A", "darkseagreen": "#8FBC8F", "darkslateblue": "#483D8B",
    "darkslategray": "#2F4F4F", "darkslategrey": "#2F4F4F", "darkturquoise": "#00CED1", "darkviolet": "#9400D3",
    "deeppink": "#FF1493", "deepskyblue": "#00BFFF", "dimgray": "#696969", "dimgrey": "#696969",
    "dodgerblue": "#1E90FF", "firebrick": "#B22222", "floralwhite": "#FFFAF0", "forestgreen": "#228B22",
    "fuchsia": "#FF00FF", "gainsboro": "#DCDCDC", "ghostwhite": "#F8F8FF", "gold": "#FFD700",
    "goldenrod": "#DAA520", "gray": "#808080", "green": "#008000", "greenyellow": "#ADFF2F",
    "grey": "#808080", "honeydew": "#F0FFF0", "hotpink": "#FF69B4", "indianred": "#CD5C5C",
    "indigo": "#4B0082", "ivory": "#FFFFF0", "khaki": "#F0E68C", "lavender": "#E6E6FA",
    "lavenderblush": "#FFF0F5", "lawngreen": "#7CFC00", "lemonchiffon": "#FFFACD", "lightblue": "#ADD8E6",
    "lightcoral": "#F08080", "lightcyan": "#E0FFFF", "lightgoldenrodyellow": "#FAFAD2", "lightgray": "#D3D3D3",
    "lightgreen": "#90EE90", "lightgrey": "#D3D3D3", "lightpink": "#FFB6C1", "lightsalmon": "#FFA07A",
    "lightseagreen": "#20B2AA", "lightskyblue": "#87CEFA", "lightslategray": "#778899", "lightslategrey": "#778899",
    "lightsteelblue": "#B0C4DE", "lightyellow": "#FFFFE0", "lime": "#00FF00", "limegreen": "#32CD32",
    "linen": "#FAF0E6", "magenta": "#FF00FF", "maroon": "#800000", "mediumaquamarine": "#66CDAA",
    "mediumblue": "#0000CD", "mediumorchid": "#BA55D3", "mediumpurple": "#9370DB", "mediumseagreen": "#3CB371",
    "mediumslateblue": "#7B68EE", "mediumspringgreen": "#00FA9A", "mediumturquoise": "#48D1CC", "mediumvioletred": "#C71585",
    "midnightblue": "#191970", "mintcream": "#F5FFFA", "mistyrose": "#FFE4E1", "moccasin": "#FFE4B5",
    "navajowhite": "#FFDEAD", "navy": "#000080", "oldlace": "#FDF5E6", "olive": "#808000",
    "olivedrab": "#6B8E23", "orange": "#FFA500", "orangered": "#FF4500", "orchid": "#DA70D6",
    "palegoldenrod": "#EEE8AA", "palegreen": "#98FB98", "paleturquoise": "#AFEEEE", "palevioletred": "#DB7093",
    "papayawhip": "#FFEFD5", "peachpuff": "#FFDAB9", "peru": "#CD853F", "pink": "#FFC0CB",
    "plum": "#DDA0DD", "powderblue": "#B0E0E6", "purple": "#800080", "rebeccapurple": "#663399",
    "red": "#FF0000", "rosybrown": "#BC8F8F", "royalblue": "#4169E1", "saddlebrown": "#8B4513",
    "salmon": "#FA8072", "sandybrown": "#F4A460", "seagreen": "#2E8B57", "seashell": "#FFF5EE",
    "sienna": "#A0522D", "silver": "#C0C0C0", "skyblue": "#87CEEB", "slateblue": "#6A5ACD",
    "slategray": "#708090", "slategrey": "#708090", "snow": "#FFFAFA", "springgreen": "#00FF7F",
    "steelblue": "#4682B4", "tan": "#D2B48C", "teal": "#008080", "thistle": "#D8BFD8",
    "tomato": "#FF6347", "turquoise": "#40E0D0", "violet": "#EE82EE", "wheat": "#F5DEB3",
    "white": "#FFFFFF", "whitesmoke": "#F5F5F5", "yellow": "#FFFF00", "yellowgreen": "#9ACD32",
}

HEX_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$")
NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?%?")

RGBA = Tuple[int, int, int, float]


def _clamp_channel(value: float) -> int:
    # Clamp before int(): 1e999 parses as inf
    if math.isnan(value):
        return 0
    return int(round(max(0.0, min(255.0, value))))


def _channel(token: str) -> int:
    if token.endswith("%"):
        return _clamp_channel(float(token[:-1]) * 2.55)
    return _clamp_channel(float(token))


def _alpha(token: str) -> float:
    value = float(token[:-1]) / 100.0 if token.endswith("%") else float(token)
    return max(0.0, min(1.0, value))


def _parse_hex(text: str) -> Optional[RGBA]:
    m = HEX_PATTERN.match(text)
    if not m:
        return None
    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(d * 2 for d in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return (r, g, b, a)


def _parse_functional(text: str) -> Optional[RGBA]:
    func = text.split("(", 1)[0].strip()
    tokens = NUMBER_PATTERN.findall(text.split("(", 1)[1])
    if len(tokens) < 3:
        return None
    a = _alpha(tokens[3]) if len(tokens) > 3 else 1.0
    if func in ("hsl", "hsla"):
        h = (float(tokens[0].rstrip("%")) % 360) / 360.0
        s = max(0.0, min(100.0, float(tokens[1].rstrip("%")))) / 100.0
        l = max(0.0, min(100.0, float(tokens[2].rstrip("%")))) / 100.0
        r, g, b = colorsys.hls_to_rgb(h, l, s)
        return (_clamp_channel(r * 255), _clamp_channel(g * 255), _clamp_channel(b * 255), a)
    # rgb(), rgba() and anything else with three leading numbers
    return (_channel(tokens[0]), _channel(tokens[1]), _channel(tokens[2]), a)


def parse_rgba(value: Optional[str]) -> Optional[RGBA]:
    """Parse any CSS color into (r, g, b, alpha); None when it cannot be read."""
    if not value:
        return None
    text = value.strip().lower()
    if not text:
        return None
    text = NAMED_COLORS.get(text, text).lower()
    try:
        if text.startswith("#"):
            return _parse_hex(text)
        if "(" in text:
            return _parse_functional(text)
    except (ValueError, OverflowError):
        return None
    return None


def to_hex(value: Optional[str]) -> Optional[str]:
    """Convert a CSS color to uppercase #RRGGBB, dropping alpha."""
    rgba = parse_rgba(value)
    if rgba is None:
        return None
    r, g, b, _ = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def is_fully_transparent(value: Optional[str]) -> bool:
    rgba = parse_rgba(value)
    return rgba is not None and rgba[3] == 0.0


def is_brand_neutral(hex_color: Optional[str]) -> bool:
    """White, black and transparent black never count as brand colors."""
    return hex_color in NEUTRAL_HEXES
