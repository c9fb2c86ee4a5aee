"""Command line tests."""

from chromaforge.cli import main, output_path
from chromaforge.core import PixelBuffer


class TestFinalizeCommand:

    def test_writes_transparent_png(self, tmp_path, green_render_png) -> None:
        source = tmp_path / "rocket.png"
        source.write_bytes(green_render_png)
        out_dir = tmp_path / "out"

        code = main(["finalize", str(source), "-o", str(out_dir), "--padding", "0"])

        assert code == 0
        written = PixelBuffer.decode((out_dir / "rocket_transparent.png").read_bytes()).to_array()
        assert written[0, 0, 3] == 0
        assert tuple(written[256, 256]) == (0, 0, 0, 255)

    def test_partial_failure_still_succeeds(self, tmp_path, green_render_png, capsys) -> None:
        good = tmp_path / "good.png"
        good.write_bytes(green_render_png)
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"nope")

        code = main(["finalize", str(good), str(bad), str(tmp_path / "missing.png")])

        assert code == 0
        assert (tmp_path / "good_transparent.png").exists()
        assert not (tmp_path / "bad_transparent.png").exists()
        assert "[FAILED]" in capsys.readouterr().out

    def test_same_stem_into_one_folder_is_not_overwritten(self, tmp_path, green_render_png, capsys) -> None:
        first = tmp_path / "a" / "icon.png"
        second = tmp_path / "b" / "icon.png"
        for path in (first, second):
            path.parent.mkdir()
            path.write_bytes(green_render_png)
        out_dir = tmp_path / "out"

        code = main(["finalize", str(first), str(second), "-o", str(out_dir)])

        out = capsys.readouterr().out
        assert code == 0
        assert f"[OK] {first}" in out
        assert f"[FAILED] {second}" in out
        assert list(out_dir.iterdir()) == [out_dir / "icon_transparent.png"]

    def test_write_failure_reported_per_file(self, tmp_path, green_render_png, capsys) -> None:
        blocked = tmp_path / "blocked.png"
        blocked.write_bytes(green_render_png)
        fine = tmp_path / "fine.png"
        fine.write_bytes(green_render_png)
        out_dir = tmp_path / "out"
        (out_dir / "blocked_transparent.png").mkdir(parents=True)

        code = main(["finalize", str(blocked), str(fine), "-o", str(out_dir)])

        out = capsys.readouterr().out
        assert code == 0
        assert f"[FAILED] {blocked}" in out
        assert (out_dir / "fine_transparent.png").is_file()

    def test_all_failed_returns_error(self, tmp_path) -> None:
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"nope")
        assert main(["finalize", str(bad)]) == 1

    def test_unknown_style_is_usage_error(self, tmp_path, green_render_png) -> None:
        source = tmp_path / "a.png"
        source.write_bytes(green_render_png)
        assert main(["finalize", str(source), "--style", "Watercolor"]) == 2

    def test_output_path_defaults_to_source_folder(self, tmp_path) -> None:
        assert output_path(tmp_path / "x.png", None) == tmp_path / "x_transparent.png"


class TestInfoCommands:

    def test_mask_color_for_green_foreground(self, capsys) -> None:
        assert main(["mask-color", "--style", "Outline", "--color", "#00b140"]) == 0
        assert capsys.readouterr().out.strip() == "#0000FF"

    def test_mask_color_ignores_color_for_multicolor_style(self, capsys) -> None:
        main(["mask-color", "--style", "Flat colored", "--color", "#00b140"])
        assert capsys.readouterr().out.strip() == "#00b140"

    def test_styles_lists_every_style(self, capsys) -> None:
        main(["styles"])
        out = capsys.readouterr().out
        assert "OUTLINE" in out
        assert "tolerance=50" in out
        assert "tolerance=25" in out
