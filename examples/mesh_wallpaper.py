"""Render a mesh wallpaper and a linear wallpaper.

Run directly with:
    python examples/mesh_wallpaper.py [output_dir]
"""
import logging
import sys
from meshwall import (
    ColorPoint,
    DEFAULT_POINTS,
    MeshRasterizer,
    PreviewSession,
    RenderQuality,
    add_point,
    export_linear,
    export_mesh,
    find_aspect_ratio,
)


def demonstrate_preview() -> None:
    # Previews render at a capped width and are upsampled to the canvas size.
    rasterizer = MeshRasterizer()
    preview = rasterizer.render(DEFAULT_POINTS, 0.4, 1920, 1080, RenderQuality.PREVIEW)
    print("Preview size:", preview.size, "top-left pixel:", preview.pixel(0, 0))

    with PreviewSession(1920, 1080, on_publish=lambda r: print("Published generation", r.generation)) as session:
        session.begin_interaction()
        moved = session.points[0].with_position(0.4, 0.1)
        session.update(points=(moved,) + session.points[1:])
        session.end_interaction()
        session.flush()
        session.wait(5.0)


def demonstrate_export(directory: str) -> None:
    points = add_point(DEFAULT_POINTS, ColorPoint(0.5, 0.5, "#6c5ce7", 0.7))
    mesh = export_mesh(points, 0.5, find_aspect_ratio("Square"), directory)
    print("Mesh wallpaper:", mesh.path, len(mesh.png), "bytes")

    linear = export_linear(
        "linear-gradient(135deg, #ff6b6b, #4ecdc4 60%, #556270)",
        find_aspect_ratio("16:9"),
        directory,
    )
    print("Linear wallpaper:", linear.path, len(linear.png), "bytes")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demonstrate_preview()
    demonstrate_export(sys.argv[1] if len(sys.argv) > 1 else ".")
