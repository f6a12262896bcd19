import base64
import binascii
import streamlit as st
from streamlit_drawable_canvas import st_canvas
from .. import config
from .canvas import SketchCanvas
from .client import ProxyClient, UNEXPECTED
from .controller import SketchController
from .state import View


def load_ui_config() -> config.UIConfig:
    # Same config file as the api server.
    return config.get_config(config.AppConfig().config_file).ui


def get_controller(conf: config.UIConfig) -> SketchController:
    if "controller" not in st.session_state:
        st.session_state.controller = SketchController(
            SketchCanvas(conf.canvas_size), ProxyClient(conf.proxy_url)
        )
    return st.session_state.controller


def image_source(value: str) -> str | bytes | None:
    """Urls are shown as is, base64 images (raw or data url) are decoded, None for anything else."""
    if value.startswith(("http://", "https://")):
        return value
    _, _, data = value.rpartition(",")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error:
        return None


def render() -> None:
    conf = load_ui_config()
    st.set_page_config(page_title="Scribble For Fun", layout="centered")
    ctl = get_controller(conf)
    canvas: SketchCanvas = ctl.canvas  # type: ignore

    st.markdown(
        "<h1 style='text-align: center;'>Scribble For Fun</h1>", unsafe_allow_html=True
    )

    # Sketch canvas
    result = st_canvas(
        stroke_width=conf.stroke_width,
        stroke_color=conf.stroke_color,
        background_color="#fff",
        width=conf.canvas_size,
        height=conf.canvas_size,
        drawing_mode="freedraw",
        initial_drawing=canvas.initial_drawing(),
        display_toolbar=False,
        key=f"canvas-{canvas.revision}",
    )
    strokes = result.json_data["objects"] if result.json_data else None
    canvas.update(strokes, result.image_data)

    undo_col, clear_col = st.columns(2)
    undo_col.button("Undo", icon=":material/undo:", on_click=ctl.undo)
    clear_col.button("Clear", icon=":material/delete:", on_click=ctl.clear)

    # Prompt
    def sync_prompt() -> None:
        ctl.on_prompt_change(st.session_state.prompt)

    def submit() -> None:
        sync_prompt()
        ctl.begin_generation()

    prompt_col, button_col = st.columns([4, 1], vertical_alignment="bottom")
    prompt_col.text_input(
        "Prompt",
        key="prompt",
        placeholder="Enter your prompt here",
        label_visibility="collapsed",
        on_change=sync_prompt,
    )
    button_col.button(
        "Generate",
        key="generate",
        type="primary",
        disabled=ctl.state.busy,
        on_click=submit,
    )

    # Request runs after Generate is drawn disabled, rerun to enable it again.
    if ctl.state.busy:
        with st.spinner("Generating..."):
            ctl.finish_generation()
        st.rerun()

    # Output image
    view, value = ctl.state.view()
    if view == View.error:
        st.markdown(f":red[{value}]")
    elif view == View.image and value is not None:
        source = image_source(value)
        if source is None:
            st.markdown(f":red[{UNEXPECTED}]")
        else:
            st.image(source, width=conf.canvas_size)
