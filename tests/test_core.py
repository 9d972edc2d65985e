from __future__ import annotations

import logging
from pathlib import Path

import pytest

from swc2dot.__main__ import main
from swc2dot.config import Parsing, Rendering, make_config
from swc2dot.core import ConversionPipeline, convert_text
from swc2dot.exceptions import DataNotFound, FileAccessError, MalformedRecord, UnknownParent
from swc2dot.logging_config import setup_logging, timed

CELL = "# soma and two dendrites\n1 1 0 0 0 1.0 -1\n2 3 1 0 0 0.5 1\n3 3 2 0 0 0.5 1\n"


def test_convert_text_end_to_end() -> None:
    dot = convert_text(CELL)

    assert dot.startswith("graph{\n")
    assert dot.endswith("}\n")
    assert "        1;\n" in dot
    assert "        2; 3;\n" in dot
    assert dot.index("    1 -- {2, 3};") < dot.index("    2;\n") < dot.index("    3;\n")


def test_convert_text_with_overrides_and_config() -> None:
    cfg = make_config(rendering=Rendering(indent=2))
    dot = convert_text(CELL, overrides={"soma": {"fillcolor": "orange"}}, cfg=cfg)
    assert "    node [shape=doublecircle,style=filled,fillcolor=orange,fontcolor=white];" in dot
    assert "  1 -- {2, 3};" in dot


def test_convert_propagates_structural_errors() -> None:
    with pytest.raises(UnknownParent):
        convert_text(CELL + "4 3 0 0 0 0.5 9\n")


def test_convert_reports_skipped_lines() -> None:
    pipeline = ConversionPipeline(make_config(parsing=Parsing(skip_malformed=True)))
    conversion = pipeline.convert(CELL + "4 3 0 0 x 0.5 1\n")

    assert len(conversion.graph) == 3
    assert [e.line for e in conversion.errors] == [5]


def test_run_single_file(tmp_path: Path) -> None:
    src = tmp_path / "cell.swc"
    src.write_text(CELL)
    dst = tmp_path / "out" / "cell.dot"

    report = ConversionPipeline(make_config()).run(src, dst)

    assert report.converted == [dst]
    assert dst.read_text() == convert_text(CELL)
    assert report.summaries[0][1].n_nodes == 3


def test_run_single_file_propagates_errors(tmp_path: Path) -> None:
    src = tmp_path / "cell.swc"
    src.write_text("1 1 0 0 0\n")
    with pytest.raises(MalformedRecord):
        ConversionPipeline(make_config()).run(src, tmp_path / "cell.dot")


def test_run_directory_mirrors_layout_and_reports_failures(tmp_path: Path) -> None:
    src = tmp_path / "traces"
    (src / "batch1").mkdir(parents=True)
    (src / "good.swc").write_text(CELL)
    (src / "batch1" / "also_good.swc").write_text(CELL)
    (src / "batch1" / "broken.swc").write_text("1 1 0 0 0 1 -1\n2 3 0 0 0 1 2\n")
    dst = tmp_path / "graphs"

    report = ConversionPipeline(make_config()).run(src, dst)

    assert sorted(p.relative_to(dst).as_posix() for p in report.converted) == [
        "batch1/also_good.dot",
        "good.dot",
    ]
    assert [p.name for p, _ in report.failed] == ["broken.swc"]
    assert not (dst / "batch1" / "broken.dot").exists()


def test_run_directory_reports_unwritable_output_and_continues(tmp_path: Path) -> None:
    src = tmp_path / "traces"
    src.mkdir()
    (src / "a.swc").write_text(CELL)
    (src / "b.swc").write_text(CELL)
    dst = tmp_path / "graphs"
    # A directory where a.dot should go makes the write fail
    (dst / "a.dot").mkdir(parents=True)

    report = ConversionPipeline(make_config()).run(src, dst)

    assert report.converted == [dst / "b.dot"]
    assert [p.name for p, _ in report.failed] == ["a.swc"]
    assert isinstance(report.failed[0][1], FileAccessError)
    assert (dst / "b.dot").read_text() == convert_text(CELL)


def test_run_empty_directory(tmp_path: Path) -> None:
    with pytest.raises(DataNotFound):
        ConversionPipeline(make_config()).run(tmp_path, tmp_path / "out")


def test_timed_logs_elapsed_time(caplog) -> None:
    logger = logging.getLogger("swc2dot.test")
    with caplog.at_level(logging.INFO, logger="swc2dot.test"):
        with timed("step", logger):
            pass
    assert any(r.getMessage().startswith("[ok] step (") for r in caplog.records)


def test_timed_logs_failure_and_reraises(caplog) -> None:
    logger = logging.getLogger("swc2dot.test")
    with caplog.at_level(logging.INFO, logger="swc2dot.test"):
        with pytest.raises(ValueError):
            with timed("step", logger):
                raise ValueError("boom")

    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert any(level == logging.ERROR and msg.startswith("[failed] step (") for level, msg in messages)
    assert not any(msg.startswith("[ok]") for _, msg in messages)


def test_setup_logging_splits_stdout_and_stderr(capsys) -> None:
    logger = setup_logging(logging.INFO)
    logger.info("progress line")
    logger.warning("warning line")
    logger.error("error line")

    captured = capsys.readouterr()
    assert "progress line" in captured.out
    assert "warning line" not in captured.out
    assert "error line" not in captured.out
    assert "warning line" in captured.err
    assert "error line" in captured.err
    assert "progress line" not in captured.err
    logger.handlers.clear()


def test_setup_logging_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    setup_logging(logging.INFO)
    logger = setup_logging(logging.DEBUG, str(log_file))

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 3
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_cli_converts_with_style_file(tmp_path: Path) -> None:
    src = tmp_path / "cell.swc"
    src.write_text(CELL + "4 5 3 0 0 0.5 1\n")
    style = tmp_path / "style.yml"
    style.write_text("custom:\n  fillcolor: red\n")
    dst = tmp_path / "cell.dot"

    code = main([str(src), "-o", str(dst), "-s", str(style), "--summary"])

    assert code == 0
    assert "node [shape=circle,style=filled,fillcolor=red,fontcolor=black];" in dst.read_text()
    logging.getLogger("swc2dot").handlers.clear()


def test_cli_reports_errors_with_exit_status(tmp_path: Path, capsys) -> None:
    src = tmp_path / "cell.swc"
    src.write_text("1 1 0 0 0 1 -1\n2 3 0 0 0 1 2\n")

    assert main([str(src), "-o", str(tmp_path / "cell.dot")]) == 1
    assert main([str(tmp_path / "missing.swc"), "-o", str(tmp_path / "x.dot")]) == 1

    captured = capsys.readouterr()
    assert "SWC file not found" in captured.err
    assert "SWC file not found" not in captured.out
    logging.getLogger("swc2dot").handlers.clear()


def test_cli_requires_output(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "cell.swc")])
    assert info.value.code == 2
