from glyphqr import make_qr, render_svg, render_text


def test_render_text_with_multi_character_glyphs():
    code = make_qr("HELLO", "L", 2)
    text = render_text(code.matrix, "██", "  ")
    lines = text.splitlines()
    assert len(lines) == code.size
    assert all(len(line) == code.size * 2 for line in lines)
    assert lines[0].startswith("██" * 7 + "  ")


def test_render_svg_dimensions():
    code = make_qr("HELLO", "L", 2)
    svg = render_svg(code.matrix, scale=5, margin=2)
    dim = (code.size + 4) * 5
    assert svg.startswith("<?xml")
    assert f"width='{dim}' height='{dim}'" in svg
    dark = sum(row.count(True) for row in code.matrix.rows())
    assert svg.count("<rect x=") == dark


def test_render_svg_colours_are_quoted():
    code = make_qr("1", "L", 0)
    svg = render_svg(code.matrix, dark="#123456", light="#abcdef")
    assert 'fill="#123456"' in svg
    assert 'fill="#abcdef"' in svg
