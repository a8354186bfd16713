from __future__ import annotations

import io
import logging

from robespierre import utils


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_json_is_compact():
    text = utils.to_json({'type': 'Ping', 'data': 1})

    assert ' ' not in text
    assert utils.from_json(text) == {'type': 'Ping', 'data': 1}


def test_plain_formatter_for_non_tty(monkeypatch):
    monkeypatch.setattr(utils.os.path, 'exists', lambda path: False)
    formatter = utils.new_formatter(logging.StreamHandler(io.StringIO()))

    assert not isinstance(formatter, utils._ColorFormatter)


def test_no_color_disables_colors(monkeypatch):
    monkeypatch.setenv('NO_COLOR', '1')
    formatter = utils.new_formatter(logging.StreamHandler(_TTY()))

    assert not isinstance(formatter, utils._ColorFormatter)


def test_colored_records_are_reset(monkeypatch):
    monkeypatch.delenv('NO_COLOR', raising=False)
    monkeypatch.setattr(utils.sys, 'platform', 'linux')
    formatter = utils.new_formatter(logging.StreamHandler(_TTY()))
    assert isinstance(formatter, utils._ColorFormatter)

    record = logging.LogRecord('robespierre.shard', logging.WARNING, __file__, 1, 'Reconnecting', None, None)
    output = formatter.format(record)

    assert output.startswith('\x1b[33m')
    assert output.endswith('\x1b[0m')
    assert 'robespierre.shard: Reconnecting' in output


def test_setup_logging_library_logger():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    logger = logging.getLogger('robespierre')
    try:
        utils.setup_logging(handler=handler, level=logging.DEBUG, root=False)
        logging.getLogger('robespierre.cache').debug('Evicted %s', 'x')
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    assert logger.level == logging.NOTSET
    assert 'robespierre.cache: Evicted x' in stream.getvalue()
