import io

from .config import Palette


def escape_xml(text):
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def svg_polygon(points, fill, stroke, stroke_width=1.6):
    points_str = " ".join(["{:.1f},{:.1f}".format(px, py) for px, py in points])
    return "<polygon points='{}' fill='{}' stroke='{}' stroke-width='{:.1f}' />\n".format(
        points_str, fill, stroke, stroke_width
    )


def draw_edge(handle, edge, palette, scale):
    handle.write(
        "<path d='{}' fill='none' stroke='{}' stroke-width='{:.2f}' stroke-linecap='round' />\n".format(
            edge.path(), palette.edge, edge.stroke_width
        )
    )
    arrow_stroke = max(1.6, round(1.8 * scale))
    for arrow in edge.arrows:
        handle.write(svg_polygon(arrow.points(), palette.arrow_fill, palette.arrow_stroke, arrow_stroke))


def draw_node(handle, view, palette, scale):
    x, y = view.screen
    handle.write(
        "<circle cx='{:.1f}' cy='{:.1f}' r='{:.1f}' fill='{}' data-node='{}' data-category='{}' />\n".format(
            x, y, view.radius, palette.node_fill(view.category), view.node, view.category
        )
    )
    font_size = max(11, round(12 * scale))
    handle.write(
        "<text x='{:.1f}' y='{:.1f}' text-anchor='middle' dominant-baseline='central' font-size='{}' "
        "font-weight='bold' font-family='Helvetica' fill='{}'>{}</text>\n".format(
            x, y, font_size, palette.node_label, escape_xml(view.node)
        )
    )


def draw_legend(handle, info, palette, width):
    selected = " - ".join(str(n) for n in info.get("selected") or []) or "none"
    items = [
        ("nodes", info.get("nodes_total", 0)),
        ("components", info.get("components", 0)),
        ("visited", info.get("visited", 0)),
        ("level", info.get("level", 0)),
        ("selected", selected),
    ]
    x = width - 200
    y = 28
    handle.write(
        "<rect x='{:.1f}' y='{:.1f}' width='180' height='{}' rx='6' ry='6' fill='#111827' "
        "fill-opacity='0.8' stroke='#334155' stroke-width='0.8'/>\n".format(x - 10, y - 18, 14 + len(items) * 18)
    )
    for idx, (key, value) in enumerate(items):
        handle.write(
            "<text x='{:.1f}' y='{:.1f}' font-size='11' font-family='Helvetica' fill='{}'>{}: {}</text>\n".format(
                x, y + idx * 18, palette.text, key, escape_xml(value)
            )
        )


def render_svg(frame, width, height, palette=None, legend=True):
    palette = palette or Palette()
    handle = io.StringIO()
    handle.write(
        "<svg xmlns='http://www.w3.org/2000/svg' width='{0}' height='{1}' viewBox='0 0 {0} {1}'>\n".format(
            int(width), int(height)
        )
    )
    handle.write("<rect x='0' y='0' width='100%' height='100%' fill='{}' />\n".format(palette.background))

    for edge in frame.edges:
        draw_edge(handle, edge, palette, frame.scale)
    for view in frame.nodes:
        draw_node(handle, view, palette, frame.scale)

    if legend:
        draw_legend(handle, frame.info, palette, width)

    handle.write("</svg>\n")
    return handle.getvalue()


def write_svg(path, frame, width, height, palette=None, legend=True):
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(render_svg(frame, width, height, palette, legend))
