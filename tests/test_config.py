from __future__ import annotations

import pytest

from swc2dot.config import Parsing, Pathing, Rendering, make_config
from swc2dot.exceptions import ConfigError


def test_defaults() -> None:
    cfg = make_config()
    assert cfg.parsing.comment_marker == "#"
    assert cfg.parsing.skip_malformed is False
    assert (cfg.rendering.indent, cfg.rendering.line_width) == (4, 80)
    assert (cfg.pathing.input_suffix, cfg.pathing.output_suffix) == (".swc", ".dot")


def test_suffixes_are_normalized() -> None:
    cfg = make_config(pathing=Pathing(input_suffix="swc", output_suffix=" gv "))
    assert (cfg.pathing.input_suffix, cfg.pathing.output_suffix) == (".swc", ".gv")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"parsing": Parsing(comment_marker="")},
        {"parsing": Parsing(comment_marker="##")},
        {"parsing": Parsing(comment_marker=" ")},
        {"rendering": Rendering(indent=-1)},
        {"rendering": Rendering(line_width=5)},
        {"pathing": Pathing(output_suffix="")},
        {"pathing": Pathing(input_suffix=".")},
    ],
)
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ConfigError):
        make_config(**kwargs)
