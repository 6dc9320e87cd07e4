"""Draw the application icons with Pillow.

The main window draws the icon at startup when no icon file is bundled.
Run this module directly to write the icons to disk for packaging:
    python -m hytale_backup.assets.icon_generator
"""

from pathlib import Path

from PIL import Image, ImageDraw


def create_app_icon(size: int = 256) -> Image.Image:
    """Create the application icon: a ZIP box with an "H" on it."""
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    # Rounded box body
    margin = size // 10
    radius = size // 8
    draw.rounded_rectangle(
        [margin, margin, size - margin, size - margin],
        radius=radius,
        fill=(45, 90, 140, 255),
    )

    # Zipper strip down the left edge
    strip_x = margin + size // 8
    tooth = max(size // 32, 1)
    for y in range(margin + tooth * 2, size - margin - tooth * 2, tooth * 2):
        draw.rectangle(
            [strip_x - tooth, y, strip_x + tooth, y + tooth - 1],
            fill=(230, 190, 90, 255),
        )

    # Stylized "H" for Hytale
    center = size // 2 + size // 16
    h_width = size // 3
    h_height = size // 2 - size // 16
    line_width = max(size // 12, 1)
    top = size // 2 - h_height // 2
    bottom = size // 2 + h_height // 2
    left = center - h_width // 2
    right = center + h_width // 2

    white = (255, 255, 255, 255)
    draw.rectangle([left, top, left + line_width, bottom], fill=white)
    draw.rectangle([right - line_width, top, right, bottom], fill=white)
    draw.rectangle(
        [left, size // 2 - line_width // 2, right, size // 2 + line_width // 2],
        fill=white,
    )

    return img


def generate_all_icons(output_dir: Path | None = None) -> list[Path]:
    """Generate all icons and save them to the icons directory.

    Returns:
        Paths of the written files
    """
    if output_dir is None:
        output_dir = Path(__file__).parent / "icons"

    output_dir.mkdir(parents=True, exist_ok=True)

    app_256 = create_app_icon(256)
    png_path = output_dir / "app_icon.png"
    app_256.save(png_path)

    ico_path = output_dir / "app_icon.ico"
    app_256.save(
        ico_path,
        format='ICO',
        sizes=[(16, 16), (32, 32), (48, 48), (256, 256)]
    )

    return [png_path, ico_path]


if __name__ == "__main__":
    for written in generate_all_icons():
        print(f"Created: {written}")
