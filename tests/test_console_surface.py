from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from sports_visuals.ui.console import ConsoleSurface


def test_add_message_lists_affordance_commands(tmp_path: Path) -> None:
    stream = io.StringIO()
    surface = ConsoleSurface(tmp_path, stream=stream)
    surface.add_message("Pick a style", "bot", affordance="style")
    surface.add_message("How is it?", "bot", affordance="satisfaction")
    surface.add_message("hello", "user")

    output = stream.getvalue()
    assert "bot> Pick a style" in output
    assert "/style digital art" in output
    assert "/satisfied" in output and "/variations" in output and "/retry" in output
    assert "you> hello" in output
    assert surface.live_affordances == {"style", "satisfaction"}

    surface.remove_affordance("style")
    assert surface.live_affordances == {"satisfaction"}


def test_render_image_grid_writes_pngs(tmp_path: Path, make_png) -> None:
    stream = io.StringIO()
    surface = ConsoleSurface(tmp_path / "out", stream=stream)
    surface.render_image_grid([make_png(), make_png((200, 0, 0))], "a tennis ace")

    assert len(surface.grid_paths) == 2
    for path in surface.grid_paths:
        assert path.exists()
        assert path.name.startswith("sports-image-")
        with Image.open(path) as image:
            assert image.format == "PNG"
    assert "/vary 2" in stream.getvalue()


def test_render_image_tracks_last_variation(tmp_path: Path, make_png) -> None:
    surface = ConsoleSurface(tmp_path, stream=io.StringIO())
    surface.render_image(make_png(), "make the jersey red")
    assert surface.last_image_path is not None
    assert surface.last_image_path.name.startswith("sports-variation-")
    assert surface.last_image_path.exists()


def test_loading_is_idempotent(tmp_path: Path) -> None:
    stream = io.StringIO()
    surface = ConsoleSurface(tmp_path, stream=stream)
    surface.show_loading()
    surface.show_loading()
    surface.hide_loading()
    surface.hide_loading()
    assert stream.getvalue().count("Done in") == 1


def test_preview_of_missing_file_reports(tmp_path: Path) -> None:
    stream = io.StringIO()
    surface = ConsoleSurface(tmp_path, stream=stream)
    surface.show_preview(str(tmp_path / "missing.png"))
    assert "Preview failed" in stream.getvalue()


def test_undecodable_payloads_are_reported_not_raised(tmp_path: Path, make_png) -> None:
    stream = io.StringIO()
    surface = ConsoleSurface(tmp_path, stream=stream)
    surface.render_image_grid(["bm90LWFuLWltYWdl", make_png(), "not base64!!"], "a slam dunk")

    assert surface.grid_paths[0] is None and surface.grid_paths[2] is None
    assert surface.grid_paths[1] is not None and surface.grid_paths[1].exists()
    output = stream.getvalue()
    assert "(1) could not be saved" in output
    assert "(3) could not be saved" in output
    assert output.count("Image save failed") == 2
    assert "/vary 2" in output

    surface.render_image("bm90LWFuLWltYWdl", "make the jersey red")
    assert surface.last_image_path is None
    assert "Variation (make the jersey red) could not be saved" in stream.getvalue()


def test_notice_writes_to_stream(tmp_path: Path) -> None:
    stream = io.StringIO()
    ConsoleSurface(tmp_path, stream=stream).notice("Nothing to view.")
    assert stream.getvalue() == "Nothing to view.\n"
