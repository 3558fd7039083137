from eventflow.renderer.svg_renderer import SvgRenderer, render_svg
from eventflow.renderer.symbols import SymbolCache

__all__ = ["SvgRenderer", "SymbolCache", "render_svg"]
