import base64
import io
from typing import Any
import numpy
from PIL import Image


def image_to_b64(img: Image.Image, format: str = "png") -> str:
    buf = io.BytesIO()
    img.save(buf, format=format)
    return base64.b64encode(buf.getvalue()).decode()


class SketchCanvas:
    """
    Keep strokes drawn on the canvas widget and the last raster it rendered.

    The widget reports its whole drawing on every rerun. Undo and clear
    edit the stroke list and bump `revision`, the page uses it as widget
    key so the widget remount with the edited drawing.
    """

    def __init__(self, size: int = 400) -> None:
        self.size = size
        self.strokes: list[dict[str, Any]] = []
        self.revision = 0
        self._raster: numpy.ndarray | None = None

    def update(self, strokes: list[dict[str, Any]] | None, raster: numpy.ndarray | None) -> None:
        if strokes is not None:
            self.strokes = list(strokes)
        if raster is not None:
            self._raster = raster

    def undo(self) -> None:
        if not self.strokes:
            return
        self.strokes.pop()
        self._redraw()

    def clear_canvas(self) -> None:
        self.strokes = []
        self._redraw()

    def _redraw(self) -> None:
        # Raster is stale until widget render again.
        self._raster = None
        self.revision += 1

    def initial_drawing(self) -> dict[str, Any]:
        return {"version": "4.4.0", "objects": self.strokes}

    def export_image(self) -> Image.Image:
        bg = Image.new("RGB", (self.size, self.size), (255, 255, 255))
        if self._raster is None:
            return bg

        # Widget raster is RGBA with transparent background.
        sketch = Image.fromarray(self._raster.astype(numpy.uint8)).convert("RGBA")
        if sketch.size != bg.size:
            sketch = sketch.resize(bg.size)
        bg.paste(sketch, (0, 0), sketch)
        return bg

    def export_png(self) -> str:
        """Export as a base64 png data url, the form provider accept as file input."""
        return "data:image/png;base64," + image_to_b64(self.export_image(), format="png")
