import argparse
import logging
import os
import sys
import time
import numpy as np
import PIL.Image
from sphere_renders import constants
from sphere_renders.camera import image_to_ndc, scale_matrix
from sphere_renders.core import Renderer
from sphere_renders.ray import Ray
from sphere_renders.rendering import Sphere
from sphere_renders.vectors import Vec4


def render_image(renderer, width, height, output):
    """Render the scene and write it as a PNG."""
    print(f"\n--- Rendering {width}x{height} ---")
    t0 = time.time()
    img = renderer.render(width=width, height=height)
    print(f"  Complete in {time.time() - t0:.2f}s")

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    PIL.Image.fromarray(img).save(output)
    print(f"  Saved {output}")
    return output


def run_geometry_verification(width=constants.DEFAULT_WIDTH, height=constants.DEFAULT_HEIGHT):
    """Run projection and intersection consistency checks."""
    print("\n--- Geometry Verification ---")
    checks = []

    # Viewport corners
    scale = scale_matrix(width, height)
    lower_left = scale @ np.array([0.0, 0.0, 0.0, 1.0])
    upper_right = scale @ np.array([float(width), float(height), 0.0, 1.0])
    checks.append(("Pixel (0, 0) maps to the NDC lower-left corner",
                   np.allclose(lower_left, constants.NDC_LOWER_LEFT)))
    checks.append(("Pixel (W, H) maps to the NDC upper-right corner",
                   np.allclose(upper_right, constants.NDC_UPPER_RIGHT)))

    # Top row of pixels points up once flipped
    top = image_to_ndc(width, height) @ np.array([0.0, 0.0, 0.0, 1.0])
    checks.append(("Top pixel row maps to +y", top[1] > 0))

    # Tangent and interior rays
    sphere = Sphere.from_center((0.5, 0.0, -1.0), 0.5)
    forward = Ray(Vec4.point(0, 0, 0), Vec4.direction(0, 0, -1))
    checks.append(("Tangent ray misses", not sphere.intersects(forward)))
    centered = Sphere.from_center((0.0, 0.0, -1.0), 0.5)
    checks.append(("Ray through the center hits", centered.intersects(forward)))

    for name, ok in checks:
        print(f"  [{'OK' if ok else 'FAIL'}] {name}")

    passed = all(ok for _, ok in checks)
    print("Verification passed." if passed else "Error: Verification failed.")
    return passed


def build_renderer(args):
    sphere = Sphere.from_center(args.center, args.radius, tuple(args.color))
    return Renderer(scene=(sphere,))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sphere Renderer CLI")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio UI")
    parser.add_argument("--render", action="store_true", help="Render the scene to a PNG file")
    parser.add_argument("--verify", action="store_true", help="Run projection and intersection checks")
    parser.add_argument("--output", default=os.path.join("output", "render.png"), help="PNG path for --render")
    parser.add_argument("--width", type=int, default=constants.DEFAULT_WIDTH, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=constants.DEFAULT_HEIGHT, help="Image height in pixels")
    parser.add_argument("--center", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=list(constants.DEFAULT_SPHERE_CENTER), help="Sphere center")
    parser.add_argument("--radius", type=float, default=constants.DEFAULT_SPHERE_RADIUS, help="Sphere radius")
    parser.add_argument("--color", type=int, nargs=4, metavar=("R", "G", "B", "A"),
                        default=list(constants.DEFAULT_SPHERE_COLOR), help="Sphere RGBA color (0-255)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.ui:
        from sphere_renders.ui import CSS, create_ui
        print("Launching UI...")
        demo = create_ui()
        demo.launch(css=CSS)
        return 0

    try:
        if args.render:
            render_image(build_renderer(args), args.width, args.height, args.output)
        elif args.verify:
            return 0 if run_geometry_verification(args.width, args.height) else 1
        else:
            parser.print_help()
    except ValueError as e:
        parser.error(str(e))
    return 0


def run_ui():
    """Entry point for sphere-renders-ui command."""
    sys.exit(main(["--ui"] + sys.argv[1:]))


def run_verify():
    """Entry point for sphere-renders-verify command."""
    sys.exit(main(["--verify"] + sys.argv[1:]))


def run():
    """Entry point for sphere-renders command."""
    sys.exit(main())


if __name__ == "__main__":
    run()
