"""Tests for the package-level entry points."""
import importlib
import os
from unittest.mock import patch

import pytest

import sinklog
import sinklog.config
from sinklog import manager as manager_module
from sinklog.capabilities import Capability
from sinklog.levels import Severity
from sinklog.manager import LogManager


class Recorder:
    capabilities = Capability.EMIT | Capability.LIFECYCLE | Capability.LEVEL_FILTER

    def __init__(self):
        self.messages = []
        self.calls = []
        self.min_level = Severity.DEBUG

    def emit(self, level, message):
        self.messages.append((level, message))

    def init(self, parameter=None):
        self.calls.append(('init', parameter))

    def close(self):
        self.calls.append(('close',))

    def set_min_level(self, level):
        self.min_level = level

    def get_min_level(self):
        return self.min_level


@pytest.fixture
def recorder(monkeypatch):
    sink = Recorder()
    monkeypatch.setattr(manager_module, '_manager', LogManager(sink))
    return sink


#
# Enabled entry points
#


@pytest.mark.skipif(not sinklog.ENABLED, reason='logging disabled in this interpreter')
class TestEntryPoints:

    @pytest.mark.parametrize(('name', 'level'), [
        ('debug', Severity.DEBUG),
        ('info', Severity.INFO),
        ('warning', Severity.WARNING),
        ('warn', Severity.WARNING),
        ('error', Severity.ERROR),
        ('fatal', Severity.FATAL),
    ])
    def test_level_functions(self, recorder, name, level):
        """Test module functions reach the active sink."""
        getattr(sinklog, name)('error code: %d', 3)
        assert recorder.messages == [(level, 'error code: 3')]

    def test_log_function(self, recorder):
        """Test log() takes an explicit level."""
        sinklog.log(Severity.ERROR, 'x=%s', 'y')
        assert recorder.messages == [(Severity.ERROR, 'x=y')]

    def test_configuration_functions(self, recorder):
        """Test init, close and set_min_level reach the active sink."""
        sinklog.init('app.log')
        sinklog.set_min_level(Severity.ERROR)
        sinklog.set_color_enabled(False)
        sinklog.close()
        assert recorder.calls == [('init', 'app.log'), ('close',)]
        assert recorder.min_level == Severity.ERROR

    def test_set_and_get_sink(self, recorder):
        """Test set_sink swaps the global sink and rebinds the formatter."""
        other = Recorder()
        sinklog.set_sink(other)
        assert sinklog.get_sink() is other
        assert sinklog.get_formatter().sink is other
        assert recorder.calls == [('close',)]
        sinklog.info('to other')
        assert other.messages == [(Severity.INFO, 'to other')]
        assert recorder.messages == []


#
# Disabled entry points
#


class TestDisabled:

    @pytest.fixture
    def disabled(self):
        with patch.dict(os.environ, {'SINKLOG_ENABLED': '0'}):
            importlib.reload(sinklog.config)
            importlib.reload(sinklog)
        yield sinklog
        importlib.reload(sinklog.config)
        importlib.reload(sinklog)

    def test_flag_off(self, disabled):
        """Test ENABLED reflects the configuration."""
        assert disabled.ENABLED is False

    def test_functions_are_noops(self, disabled):
        """Test the log functions share one no-op."""
        assert disabled.info is disabled.debug is disabled.fatal
        assert disabled.warn is disabled.warning

    def test_no_manager_constructed(self, disabled, monkeypatch):
        """Test logging while disabled never builds a manager or sink."""
        monkeypatch.setattr(manager_module, '_manager', None)
        disabled.info('%s', 'ignored')
        disabled.log(Severity.FATAL, 'ignored')
        assert manager_module._manager is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
