import functools
import gradio as gr
import PIL.Image
from . import constants
from .core import Renderer
from .rendering import Sphere

# Keep the old image visible while a new frame is generated.
CSS = """
#output_img img { object-fit: contain; image-rendering: pixelated; }

.generating, .pending {
    opacity: 1 !important;
    filter: none !important;
    transition: none !important;
}
"""

# Slider order: center x/y/z, radius, red, green, blue, width
DEFAULTS = [
    *constants.DEFAULT_SPHERE_CENTER,
    constants.DEFAULT_SPHERE_RADIUS,
    *constants.DEFAULT_SPHERE_COLOR[:3],
    constants.DEFAULT_WIDTH,
]


@functools.lru_cache(maxsize=8)
def renderer_for(sphere):
    """One Renderer per scene so repeated frames reuse its frame cache."""
    return Renderer(scene=(sphere,))


def render_frame(center_x, center_y, center_z, radius, red, green, blue, resolution):
    """Render the single-sphere scene for the current slider values."""
    sphere = Sphere.from_center((center_x, center_y, center_z), radius,
                                (int(red), int(green), int(blue), 255))
    # The image plane is 2:1
    w = int(resolution)
    h = max(1, w // 2)

    image_data = renderer_for(sphere).render(width=w, height=h)
    return PIL.Image.fromarray(image_data)

def create_ui():

    with gr.Blocks(title="Sphere Renderer") as demo:

        gr.Markdown("# Sphere Renderer")
        gr.Markdown("One ray per pixel from a pinhole camera at the origin.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### Sphere")
                    center_x = gr.Slider(minimum=-3, maximum=3, value=DEFAULTS[0], step=0.01, label="Center X")
                    center_y = gr.Slider(minimum=-3, maximum=3, value=DEFAULTS[1], step=0.01, label="Center Y")
                    center_z = gr.Slider(minimum=-5, maximum=1, value=DEFAULTS[2], step=0.01, label="Center Z", info="Camera looks down -Z")
                    radius = gr.Slider(minimum=0.01, maximum=3, value=DEFAULTS[3], step=0.01, label="Radius")

                with gr.Group():
                    gr.Markdown("### Color")
                    red = gr.Slider(minimum=0, maximum=255, value=DEFAULTS[4], step=1, label="Red")
                    green = gr.Slider(minimum=0, maximum=255, value=DEFAULTS[5], step=1, label="Green")
                    blue = gr.Slider(minimum=0, maximum=255, value=DEFAULTS[6], step=1, label="Blue")

                res_slider = gr.Slider(minimum=64, maximum=1024, value=DEFAULTS[7], step=16, label="Render Width", info="Height is half the width")
                reset_btn = gr.Button("Reset", variant="secondary")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Render", interactive=False, elem_id="output_img")

        inputs = [center_x, center_y, center_z, radius, red, green, blue, res_slider]

        def reset_view():
            return list(DEFAULTS)

        reset_btn.click(fn=reset_view, outputs=inputs)

        # Auto-render on any change
        for input_comp in inputs:
            input_comp.change(fn=render_frame, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        # Initial render
        demo.load(fn=render_frame, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo

if __name__ == "__main__":
    demo = create_ui()
    demo.launch(css=CSS)
