"""Generate the application icon.

Run this script directly to generate icons:
    python -m xse_preloader_config.assets.icon_generator
"""

from pathlib import Path

from PIL import Image, ImageDraw

ICO_SIZES = [(16, 16), (32, 32), (48, 48), (256, 256)]


def create_app_icon(size: int = 256) -> Image.Image:
    """Create the application icon: a gear-like ring around a plug pin."""
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    # Background circle
    margin = size // 16
    draw.ellipse(
        [margin, margin, size - margin, size - margin],
        fill=(45, 110, 80, 255)
    )

    center = size // 2
    ring_radius = size // 4
    line_width = max(1, size // 14)

    # Ring
    draw.ellipse(
        [center - ring_radius, center - ring_radius,
         center + ring_radius, center + ring_radius],
        outline=(255, 255, 255, 255),
        width=line_width
    )

    # Vertical pin through the ring
    pin_half = max(1, line_width // 2)
    draw.rectangle(
        [center - pin_half, center - ring_radius - line_width * 2,
         center + pin_half, center + ring_radius // 2],
        fill=(255, 255, 255, 255)
    )

    return img


def generate_all_icons(output_dir: Path | None = None) -> list[Path]:
    """Generate the icon files and save them to the icons directory.

    Returns:
        Paths of the files that were written
    """
    if output_dir is None:
        output_dir = Path(__file__).parent / "icons"

    output_dir.mkdir(parents=True, exist_ok=True)

    app_256 = create_app_icon(256)
    png_path = output_dir / "app_icon.png"
    app_256.save(png_path)
    print(f"Created: {png_path}")

    ico_path = output_dir / "app_icon.ico"
    app_256.save(ico_path, format='ICO', sizes=ICO_SIZES)
    print(f"Created: {ico_path}")

    return [png_path, ico_path]


if __name__ == "__main__":
    generate_all_icons()
