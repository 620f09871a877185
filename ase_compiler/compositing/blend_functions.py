"""
Blend Functions

Per-pixel layer blending, vectorised with numpy over whole cel rectangles.

All arrays are int32 with RGBA in the last axis and straight (not
premultiplied) alpha. Each blend mode first computes a blended colour per
channel, then composites it over the backdrop with the Normal formula:

    Sa' = MUL_UN8(Sa, opacity)
    Ra  = Sa' + Ba - MUL_UN8(Ba, Sa')
    Rc  = Bc + trunc((Sc - Bc) * Sa' / Ra)

Integer helpers use Aseprite's 8-bit arithmetic:

    MUL_UN8(a, b) = ((t >> 8) + t) >> 8    with t = a * b + 0x80
    DIV_UN8(a, b) = (a * 255 + b / 2) / b

HSL modes (hue, saturation, color, luminosity) use the non-separable
definitions with Lum = 0.3 R + 0.59 G + 0.11 B.
"""

from typing import Callable, Dict, Union

import numpy as np

from ..document.data_types import BlendMode

IntArray = Union[np.ndarray, int]


def mul_un8(a: IntArray, b: IntArray) -> IntArray:
    """Multiply two 8-bit values, rounding like a * b / 255."""
    t = a * b + 0x80
    return ((t >> 8) + t) >> 8


def div_un8(a: IntArray, b: IntArray) -> IntArray:
    """Divide two 8-bit values, result scaled to 0..255. b must be > 0."""
    return (a * 0xFF + (b // 2)) // b


def _trunc_div(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    """Integer division rounding toward zero. den must be > 0."""
    q = np.abs(num) // den
    return np.where(num < 0, -q, q)


# ---------------------------------------------------------------------------
# Separable modes: operate on (..., 3) int arrays
# ---------------------------------------------------------------------------

def _multiply(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return mul_un8(b, s)


def _screen(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return b + s - mul_un8(b, s)


def _overlay(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    doubled = b << 1
    low = mul_un8(s, doubled)
    shifted = doubled - 255
    high = s + shifted - mul_un8(s, shifted)
    return np.where(b < 128, low, high)


def _darken(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return np.minimum(b, s)


def _lighten(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return np.maximum(b, s)


def _color_dodge(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    inverted = 255 - s
    divided = div_un8(b, np.maximum(inverted, 1))
    return np.where(b == 0, 0, np.where(b >= inverted, 255, divided))


def _color_burn(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    inverted = 255 - b
    divided = 255 - div_un8(inverted, np.maximum(s, 1))
    return np.where(b == 255, 255, np.where(inverted >= s, 0, divided))


def _hard_light(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    doubled = s << 1
    low = mul_un8(b, doubled)
    shifted = doubled - 255
    high = b + shifted - mul_un8(b, shifted)
    return np.where(s < 128, low, high)


def _soft_light(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    bf = b / 255.0
    sf = s / 255.0
    d = np.where(bf <= 0.25, ((16 * bf - 12) * bf + 4) * bf, np.sqrt(bf))
    r = np.where(sf <= 0.5,
                 bf - (1.0 - 2.0 * sf) * bf * (1.0 - bf),
                 bf + (2.0 * sf - 1.0) * (d - bf))
    return (r * 255 + 0.5).astype(np.int32)


def _difference(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return np.abs(b - s)


def _exclusion(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return b + s - 2 * mul_un8(b, s)


def _addition(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return np.minimum(b + s, 255)


def _subtract(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    return np.maximum(b - s, 0)


def _divide(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    divided = div_un8(b, np.maximum(s, 1))
    return np.where(b == 0, 0, np.where(b >= s, 255, divided))


# ---------------------------------------------------------------------------
# Non-separable (HSL) modes: operate on (..., 3) float arrays in 0..1
# ---------------------------------------------------------------------------

def _lum(rgb: np.ndarray) -> np.ndarray:
    return 0.3 * rgb[..., 0] + 0.59 * rgb[..., 1] + 0.11 * rgb[..., 2]


def _sat(rgb: np.ndarray) -> np.ndarray:
    return rgb.max(axis=-1) - rgb.min(axis=-1)


def _clip_color(rgb: np.ndarray) -> np.ndarray:
    # n and x are taken before either correction
    l = _lum(rgb)[..., None]
    n = rgb.min(axis=-1, keepdims=True)
    x = rgb.max(axis=-1, keepdims=True)

    below = n < 0
    low_den = np.where(below & (l != n), l - n, 1.0)
    rgb = np.where(below, l + (rgb - l) * l / low_den, rgb)

    above = x > 1
    high_den = np.where(above & (x != l), x - l, 1.0)
    rgb = np.where(above, l + (rgb - l) * (1 - l) / high_den, rgb)
    return rgb


def _set_lum(rgb: np.ndarray, l: np.ndarray) -> np.ndarray:
    d = l - _lum(rgb)
    return _clip_color(rgb + d[..., None])


def _channel(rgb: np.ndarray, index: np.ndarray) -> np.ndarray:
    return np.take_along_axis(rgb, index[..., None], axis=-1)[..., 0]


def _assign(rgb: np.ndarray, index: np.ndarray, value: np.ndarray):
    np.put_along_axis(rgb, index[..., None], value[..., None], axis=-1)


def _set_sat(rgb: np.ndarray, s: np.ndarray) -> np.ndarray:
    # Channels are picked by index with strict comparisons. Tied channels can
    # land min and mid on the same index, so the writes below must stay in
    # mid, max, min order.
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    i_min = np.where(r < np.where(g < b, g, b), 0, np.where(g < b, 1, 2))
    i_max = np.where(r > np.where(g > b, g, b), 0, np.where(g > b, 1, 2))
    i_mid = np.where(r > g,
                     np.where(g > b, 1, np.where(r > b, 2, 0)),
                     np.where(g > b, np.where(b > r, 2, 0), 1))

    c_min, c_mid, c_max = _channel(rgb, i_min), _channel(rgb, i_mid), _channel(rgb, i_max)
    spread = c_max > c_min
    span = np.where(spread, c_max - c_min, 1.0)

    result = rgb.copy()
    _assign(result, i_mid, np.where(spread, (c_mid - c_min) * s / span, 0.0))
    _assign(result, i_max, np.where(spread, s, 0.0))
    _assign(result, i_min, np.zeros_like(c_min))
    return result


def _to_channels(rgb: np.ndarray) -> np.ndarray:
    return np.clip(np.trunc(255.0 * rgb), 0, 255).astype(np.int32)


def _hue(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    bf, sf = b / 255.0, s / 255.0
    result = _set_sat(sf, _sat(bf))
    return _to_channels(_set_lum(result, _lum(bf)))


def _saturation(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    bf, sf = b / 255.0, s / 255.0
    result = _set_sat(bf, _sat(sf))
    return _to_channels(_set_lum(result, _lum(bf)))


def _color(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    bf, sf = b / 255.0, s / 255.0
    return _to_channels(_set_lum(sf, _lum(bf)))


def _luminosity(b: np.ndarray, s: np.ndarray) -> np.ndarray:
    bf, sf = b / 255.0, s / 255.0
    return _to_channels(_set_lum(bf, _lum(sf)))


_BLEND_FUNCTIONS: Dict[BlendMode, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    BlendMode.MULTIPLY: _multiply,
    BlendMode.SCREEN: _screen,
    BlendMode.OVERLAY: _overlay,
    BlendMode.DARKEN: _darken,
    BlendMode.LIGHTEN: _lighten,
    BlendMode.COLOR_DODGE: _color_dodge,
    BlendMode.COLOR_BURN: _color_burn,
    BlendMode.HARD_LIGHT: _hard_light,
    BlendMode.SOFT_LIGHT: _soft_light,
    BlendMode.DIFFERENCE: _difference,
    BlendMode.EXCLUSION: _exclusion,
    BlendMode.HUE: _hue,
    BlendMode.SATURATION: _saturation,
    BlendMode.COLOR: _color,
    BlendMode.LUMINOSITY: _luminosity,
    BlendMode.ADDITION: _addition,
    BlendMode.SUBTRACT: _subtract,
    BlendMode.DIVIDE: _divide,
}


def _normal(b_rgb: np.ndarray, b_alpha: np.ndarray, s_rgb: np.ndarray, s_alpha: np.ndarray,
            opacity: int) -> np.ndarray:
    s_alpha = mul_un8(s_alpha, opacity)
    r_alpha = s_alpha + b_alpha - mul_un8(b_alpha, s_alpha)

    den = np.where(r_alpha == 0, 1, r_alpha)[..., None]
    rgb = b_rgb + _trunc_div((s_rgb - b_rgb) * s_alpha[..., None], den)

    # Transparent backdrop takes the source colour as-is
    rgb = np.where((b_alpha == 0)[..., None], s_rgb, rgb)
    return np.concatenate([rgb, r_alpha[..., None]], axis=-1)


def blend(mode: BlendMode, backdrop: np.ndarray, source: np.ndarray, opacity: int) -> np.ndarray:
    """
    Blend source over backdrop.

    Args:
        mode: Layer blend mode
        backdrop: (..., 4) int32 RGBA
        source: (..., 4) int32 RGBA, same shape as backdrop
        opacity: Combined layer/cel opacity 0..255

    Returns:
        (..., 4) int32 RGBA

    Raises:
        ValueError: Unknown blend mode
    """
    b_rgb, b_alpha = backdrop[..., :3], backdrop[..., 3]
    s_rgb, s_alpha = source[..., :3], source[..., 3]

    if mode == BlendMode.NORMAL:
        blended = s_rgb
    else:
        func = _BLEND_FUNCTIONS.get(mode)
        if func is None:
            raise ValueError(f"Unknown blend mode {mode!r}")
        blended = np.where((b_alpha == 0)[..., None], s_rgb, func(b_rgb, s_rgb))

    result = _normal(b_rgb, b_alpha, blended, s_alpha, opacity)

    # Transparent source leaves the backdrop untouched
    result = np.where((s_alpha == 0)[..., None], backdrop, result)
    # Fully transparent results are transparent black
    result = np.where((result[..., 3] == 0)[..., None], 0, result)
    return result.astype(np.int32)


def premultiply(pixels: np.ndarray) -> np.ndarray:
    """Premultiply RGB by alpha for a (..., 4) int32 array."""
    alpha = pixels[..., 3:4]
    rgb = mul_un8(pixels[..., :3], alpha)
    return np.concatenate([rgb, alpha], axis=-1)
