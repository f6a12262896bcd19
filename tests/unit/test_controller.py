from unittest import TestCase, mock
from scribble.ui.client import ProxyClient, Result
from scribble.ui.controller import SketchController, EMPTY_PROMPT
from scribble.ui.canvas import SketchCanvas
from scribble.ui.state import SketchState


def make_controller(result: Result | None = None) -> SketchController:
    canvas = mock.MagicMock(spec=SketchCanvas)
    canvas.export_png.return_value = "data:image/png;base64,abc"
    client = mock.MagicMock(spec=ProxyClient)
    client.generate.return_value = result or Result(final_image="final_url")
    return SketchController(canvas, client)


class TestSketchController(TestCase):

    def test_prompt_change(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")
        self.assertEqual(ctl.state.prompt_text, "a cat")

    def test_undo_and_clear_delegate_to_canvas(self):
        ctl = make_controller()

        ctl.undo()
        ctl.clear()

        ctl.canvas.undo.assert_called_once_with()  # type: ignore
        ctl.canvas.clear_canvas.assert_called_once_with()  # type: ignore

    def test_empty_prompt(self):
        ctl = make_controller()

        ctl.generate_output_image()

        ctl.client.generate.assert_not_called()  # type: ignore
        ctl.canvas.export_png.assert_not_called()  # type: ignore
        self.assertEqual(ctl.state.error_message, "You need to provide a prompt.")
        self.assertEqual(ctl.state.error_message, EMPTY_PROMPT)
        self.assertIsNone(ctl.state.output_image_url)

    def test_generate_once(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")

        ctl.generate_output_image()

        ctl.client.generate.assert_called_once_with("data:image/png;base64,abc", "a cat")  # type: ignore

    def test_success_show_final_image(self):
        ctl = make_controller(Result(final_image="final_url"))
        ctl.state.error_message = "old error"
        ctl.on_prompt_change("a cat")

        ctl.generate_output_image()

        self.assertIsNone(ctl.state.error_message)
        self.assertEqual(ctl.state.output_image_url, "final_url")
        self.assertFalse(ctl.state.busy)

    def test_error_keep_previous_image(self):
        ctl = make_controller(Result(error="Something went wrong"))
        ctl.state.output_image_url = "previous_url"
        ctl.on_prompt_change("a cat")

        ctl.generate_output_image()

        self.assertEqual(ctl.state.error_message, "Something went wrong")
        self.assertEqual(ctl.state.output_image_url, "previous_url")

    def test_busy_ignore_submit(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")
        ctl.state.busy = True

        ctl.generate_output_image()

        ctl.client.generate.assert_not_called()  # type: ignore

    def test_busy_during_request(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")
        seen: list[bool] = []

        def generate(image: str, prompt: str) -> Result:
            seen.append(ctl.state.busy)
            return Result(final_image="final_url")

        ctl.client.generate.side_effect = generate  # type: ignore
        ctl.generate_output_image()

        self.assertEqual(seen, [True])
        self.assertFalse(ctl.state.busy)

    def test_submit_while_request_in_flight(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")
        resubmits: list[bool] = []

        def generate(image: str, prompt: str) -> Result:
            resubmits.append(ctl.begin_generation())
            return Result(final_image="final_url")

        ctl.client.generate.side_effect = generate  # type: ignore
        ctl.generate_output_image()

        self.assertEqual(resubmits, [False])
        ctl.client.generate.assert_called_once()  # type: ignore

    def test_begin_keep_busy_until_finish(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")

        self.assertTrue(ctl.begin_generation())
        self.assertTrue(ctl.state.busy)
        ctl.client.generate.assert_not_called()  # type: ignore

        ctl.finish_generation()

        self.assertFalse(ctl.state.busy)
        ctl.client.generate.assert_called_once_with("data:image/png;base64,abc", "a cat")  # type: ignore

    def test_finish_reset_busy_on_failure(self):
        ctl = make_controller()
        ctl.on_prompt_change("a cat")
        ctl.client.generate.side_effect = RuntimeError("boom")  # type: ignore

        ctl.begin_generation()
        with self.assertRaises(RuntimeError):
            ctl.finish_generation()

        self.assertFalse(ctl.state.busy)

    def test_use_given_state(self):

        state = SketchState(prompt_text="kept")
        ctl = SketchController(mock.MagicMock(), mock.MagicMock(), state)
        self.assertIs(ctl.state, state)
