import logging

import pytest


@pytest.fixture(autouse=True)
def reset_plagcheck_logger():
    """CLI runs attach a handler bound to the runner's stderr; drop it afterwards."""
    log = logging.getLogger("plagcheck")
    yield
    log.handlers[:] = []
    log.setLevel(logging.NOTSET)
    log.propagate = True


@pytest.fixture
def write(tmp_path):
    def _write(name, content):
        p = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        p.write_bytes(content)
        return str(p)
    return _write
