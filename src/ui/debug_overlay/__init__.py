from ui.debug_overlay.surface import DisplaySurface, LabelSurface
from ui.debug_overlay.text_view_helper import DebugTextViewHelper

__all__ = ["DisplaySurface", "LabelSurface", "DebugTextViewHelper"]
