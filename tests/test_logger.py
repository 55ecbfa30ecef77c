from __future__ import annotations

import io
import json

import numpy as np

from spt import NoopLogger, StdLogger


def test_text_format_and_threshold():
    buf = io.StringIO()
    log = StdLogger(level="info", stream=buf)
    log.debug("hidden", a=1)
    log.info("solve.start", order=4, root=0)
    log.warning("negative_cycle")
    assert buf.getvalue().splitlines() == [
        "info solve.start order=4 root=0",
        "warning negative_cycle",
    ]


def test_default_level_is_warning():
    log = StdLogger(stream=io.StringIO())
    assert not log.enabled("info")
    assert log.enabled("warning")


def test_json_format_handles_numpy_values():
    buf = io.StringIO()
    log = StdLogger(level="debug", json_fmt=True, stream=buf)
    log.debug("bellman.violated", u=np.int64(1), d_v=np.float32(2.5), roots=(0, 3))
    obj = json.loads(buf.getvalue())
    assert obj == {"level": "debug", "event": "bellman.violated", "u": 1, "d_v": 2.5, "roots": [0, 3]}


def test_noop_logger_accepts_everything():
    log = NoopLogger()
    log.debug("x", a=1)
    log.info("y")
    log.warning("z", b=None)


def test_logger_methods_are_documented():
    for cls in (NoopLogger, StdLogger):
        for name in ("debug", "info", "warning"):
            assert getattr(cls, name).__doc__
