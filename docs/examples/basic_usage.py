"""Basic font embedding examples."""

import sys

from svgfontembed import AmbiguousFontMatchError, SVGDocument, embed_file, find_embed_fonts

# Example 1: Simple embedding using embed_file() function
# Fonts are searched in the current directory and its subdirectories
print("Example 1: Simple embedding")
output = embed_file("drawing.svg")
print(f"✓ Created {output} with embedded fonts")

# Example 2: Pick a font file when several weights match
print("\nExample 2: Explicit font file")
try:
    embed_file("drawing.svg", font_dir="fonts")
except AmbiguousFontMatchError as e:
    print(f"✗ {e}")
    # e.files holds base names, so this retry only works when the font sits
    # directly in fonts/. Pass the path relative to fonts/ otherwise.
    embed_file("drawing.svg", font_files=[e.files[1]], font_dir="fonts")
    print(f"✓ Embedded {e.files[1]} for '{e.family}'")

# Example 3: Using SVGDocument for more control
print("\nExample 3: Using SVGDocument")
document = SVGDocument.load("drawing.svg")
print(f"Font families: {document.families}")
document.resolve_fonts(font_dir="fonts")
document.save("embedded.svg")
print("✓ Created embedded.svg")

# Example 4: Work on SVG text
print("\nExample 4: SVG as string")
with open("drawing.svg", encoding="utf-8") as f:
    svg = find_embed_fonts(f.read(), base_dir="fonts", report=sys.stdout)
print(f"✓ Generated SVG string ({len(svg)} characters)")
