from dataclasses import dataclass
from enum import StrEnum


class View(StrEnum):
    nothing = "nothing"
    error = "error"
    image = "image"


@dataclass
class SketchState:
    prompt_text: str = ""
    error_message: str | None = None
    output_image_url: str | None = None
    busy: bool = False

    def view(self) -> tuple[View, str | None]:
        """What the output region shows, error wins over image."""
        if self.error_message is not None:
            return View.error, self.error_message
        if self.output_image_url is not None:
            return View.image, self.output_image_url
        return View.nothing, None
