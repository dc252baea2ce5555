"""
colors.py - Validation of player colors entered in a front end

A color is accepted when it is a CSS color: a named color, a hex color, or
an rgb()/rgba()/hsl()/hsla() function. Two players may not pick the same
color since the color also identifies the player.
"""

import re

CSS_NAMED_COLORS = frozenset("""
aliceblue antiquewhite aqua aquamarine azure beige bisque black blanchedalmond
blue blueviolet brown burlywood cadetblue chartreuse chocolate coral
cornflowerblue cornsilk crimson cyan darkblue darkcyan darkgoldenrod darkgray
darkgreen darkgrey darkkhaki darkmagenta darkolivegreen darkorange darkorchid
darkred darksalmon darkseagreen darkslateblue darkslategray darkslategrey
darkturquoise darkviolet deeppink deepskyblue dimgray dimgrey dodgerblue
firebrick floralwhite forestgreen fuchsia gainsboro ghostwhite gold goldenrod
gray green greenyellow grey honeydew hotpink indianred indigo ivory khaki
lavender lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon
lightseagreen lightskyblue lightslategray lightslategrey lightsteelblue
lightyellow lime limegreen linen magenta maroon mediumaquamarine mediumblue
mediumorchid mediumpurple mediumseagreen mediumslateblue mediumspringgreen
mediumturquoise mediumvioletred midnightblue mintcream mistyrose moccasin
navajowhite navy oldlace olive olivedrab orange orangered orchid palegoldenrod
palegreen paleturquoise palevioletred papayawhip peru pink plum powderblue
purple rebeccapurple red rosybrown royalblue saddlebrown salmon sandybrown
seagreen seashell sienna silver skyblue slateblue slategray slategrey snow
springgreen steelblue tan teal thistle tomato turquoise violet wheat white
whitesmoke yellow yellowgreen
""".split())

_HEX_RE = re.compile(r'^#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$')
_NUMBER = r'\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)%?\s*'
_FUNC_RE = re.compile(
    r'^(?:rgba?|hsla?)\(' + _NUMBER + r'(?:,' + _NUMBER + r'){2}(?:,' + _NUMBER + r')?\)$'
)
# Space separated syntax, e.g. "rgb(255 0 0 / 50%)"
_FUNC_SPACE_RE = re.compile(
    r'^(?:rgba?|hsla?)\(' + _NUMBER + r'(?:\s' + _NUMBER + r'){2}(?:/' + _NUMBER + r')?\)$'
)


def normalize_color(color: str) -> str:
    return color.strip().lower()


def is_css_color(color: str) -> bool:
    """Check if ``color`` is a CSS color value (case-insensitive)."""
    color = normalize_color(color)
    if not color:
        return False
    if color in CSS_NAMED_COLORS:
        return True
    # Angles are allowed for the hue of hsl()
    stripped = re.sub(r'(\d)deg\b', r'\1', color)
    return bool(_HEX_RE.match(color) or _FUNC_RE.match(stripped) or _FUNC_SPACE_RE.match(stripped))


def is_color_valid(color1: str, color2: str) -> bool:
    """Both colors are valid CSS colors and they differ."""
    return (is_css_color(color1) and is_css_color(color2)
            and normalize_color(color1) != normalize_color(color2))
