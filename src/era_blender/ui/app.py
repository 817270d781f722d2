"""Gradio UI for Era Blender."""

import logging

import gradio as gr

from era_blender.core.config import EraBlenderConfig, config
from era_blender.core.eras import list_eras
from era_blender.core.transformer import EraTransformer

from .handlers import describe_position, handle_transform, handle_transform_all

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXAMPLE_SCENES = [
    "A bustling city street with people walking",
    "A family having dinner together",
    "A quiet village square at dawn",
    "Friends gathered around a campfire",
]


def create_ui(transformer: EraTransformer) -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Args:
        transformer: Service used by every event handler.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .era-caption {
        text-align: center;
        font-size: 0.95em;
    }
    """

    eras = list_eras()

    async def on_transform(image_path, text, position):
        return await handle_transform(transformer, image_path, text, position)

    async def on_transform_all(image_path, text):
        return await handle_transform_all(transformer, image_path, text)

    app = gr.Blocks(title="Era Blender")

    with app:
        gr.Markdown(
            f"""
            # Era Blender
            ### Re-imagine a photo or a scene from {eras[0].label} vintage to {eras[-1].label} future
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                image_input = gr.Image(
                    label="Image",
                    type="filepath",
                    sources=["upload", "clipboard"],
                    height=300,
                )
                text_input = gr.Textbox(
                    label="Or describe a scene",
                    placeholder="Describe a scene to re-imagine across eras...",
                    lines=3,
                )
                gr.Examples(examples=[[s] for s in EXAMPLE_SCENES], inputs=[text_input])

                era_slider = gr.Slider(
                    label="Era",
                    minimum=0,
                    maximum=len(eras) - 1,
                    step=1,
                    value=0,
                )
                era_caption = gr.Markdown(
                    value=describe_position(0),
                    elem_classes=["era-caption"],
                )

                with gr.Row():
                    transform_btn = gr.Button("Transform", variant="primary")
                    transform_all_btn = gr.Button("Generate Across Eras")

            with gr.Column(scale=1):
                output = gr.Markdown(value="*Choose an image or a scene, then pick an era*")

        era_slider.change(fn=describe_position, inputs=[era_slider], outputs=[era_caption])
        transform_btn.click(
            fn=on_transform,
            inputs=[image_input, text_input, era_slider],
            outputs=[output],
        )
        transform_all_btn.click(
            fn=on_transform_all,
            inputs=[image_input, text_input],
            outputs=[output],
        )

    return app, custom_css


def main(app_config: EraBlenderConfig | None = None):
    """Main entry point for the UI."""
    cfg = app_config or config
    logger.info("Starting Era Blender UI...")
    if not cfg.has_credential:
        logger.warning("GEMINI_API_KEY not found; transformations will fail until it is set")

    app, custom_css = create_ui(EraTransformer(cfg))

    logger.info(f"Launching Gradio UI on {cfg.gradio_server_name}:{cfg.gradio_server_port}")

    app.launch(
        server_name=cfg.gradio_server_name,
        server_port=cfg.gradio_server_port,
        share=cfg.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
