from typing import Protocol
from loguru import logger
from .client import ProxyClient
from .state import SketchState

EMPTY_PROMPT = "You need to provide a prompt."


class Canvas(Protocol):

    def undo(self) -> None: ...

    def clear_canvas(self) -> None: ...

    def export_png(self) -> str: ...


class SketchController:

    def __init__(self, canvas: Canvas, client: ProxyClient, state: SketchState | None = None) -> None:
        self.canvas = canvas
        self.client = client
        self.state = state if state is not None else SketchState()

    def on_prompt_change(self, text: str) -> None:
        self.state.prompt_text = text

    def undo(self) -> None:
        self.canvas.undo()

    def clear(self) -> None:
        self.canvas.clear_canvas()

    def generate_output_image(self) -> None:
        if self.begin_generation():
            self.finish_generation()

    def begin_generation(self) -> bool:
        """
        Check the prompt and mark a request in flight.

        Return False when nothing should be sent, either a request is
        already in flight or prompt is empty.
        """
        if self.state.busy:
            logger.debug("generation in flight, ignore submit.")
            return False

        if not self.state.prompt_text:
            self.state.error_message = EMPTY_PROMPT
            return False

        self.state.busy = True
        return True

    def finish_generation(self) -> None:
        try:
            self.generate_ai_image(self.canvas.export_png())
        finally:
            self.state.busy = False

    def generate_ai_image(self, encoded_image: str) -> None:
        result = self.client.generate(encoded_image, self.state.prompt_text)

        if not result.ok:
            self.state.error_message = result.error
            return

        self.state.error_message = None
        self.state.output_image_url = result.final_image
