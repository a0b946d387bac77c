from io import StringIO

import pytest

from sinklog.capabilities import Capability, supports
from sinklog.levels import Severity
from sinklog.sinks import CompositeSink, EnhancedConsoleSink, FileSink


@pytest.fixture
def composite(tmp_path):
    sink = CompositeSink(StringIO())
    sink.set_color_enabled(False)
    sink.init(str(tmp_path / 'composite.log'))
    yield sink
    sink.close()


def console_text(sink):
    return sink.console.stream.getvalue()


def file_text(sink):
    with open(sink.file.path, encoding='utf-8', newline='') as f:
        return f.read()


#
# Construction
#


class TestCompositeConstruction:

    def test_children_built_internally(self):
        """Test the composite owns an enhanced console and a file sink."""
        sink = CompositeSink()
        assert isinstance(sink.console, EnhancedConsoleSink)
        assert isinstance(sink.file, FileSink)

    def test_supports_all_capabilities(self):
        """Test the composite exposes every capability."""
        sink = CompositeSink()
        for capability in (Capability.EMIT, Capability.LIFECYCLE,
                           Capability.LEVEL_FILTER, Capability.COLOR_CONTROL):
            assert supports(sink, capability)


#
# Fan-out
#


class TestCompositeEmit:

    def test_fans_out_to_both(self, composite):
        """Test one emit reaches console and file."""
        composite.emit(Severity.INFO, 'both')
        assert '[INFO] both' in console_text(composite)
        assert '[INFO] both' in file_text(composite)

    def test_set_min_level_suppresses_both(self, composite):
        """Test a composite threshold silences both children."""
        composite.set_min_level(Severity.WARNING)
        composite.emit(Severity.INFO, 'quiet')
        assert console_text(composite) == ''
        assert file_text(composite) == ''
        composite.emit(Severity.WARNING, 'loud')
        assert 'loud' in console_text(composite)
        assert 'loud' in file_text(composite)

    def test_set_min_level_propagates(self, composite):
        """Test children receive the new threshold."""
        composite.set_min_level(Severity.ERROR)
        assert composite.get_min_level() == Severity.ERROR
        assert composite.console.get_min_level() == Severity.ERROR
        assert composite.file.get_min_level() == Severity.ERROR

    @pytest.mark.parametrize('level', [None, object(), 'loud', 7])
    def test_unrecognized_level_ignored(self, composite, level):
        """Test a value naming no severity keeps composite and children unchanged."""
        composite.set_min_level(Severity.WARNING)
        composite.set_min_level(level)
        assert composite.get_min_level() is Severity.WARNING
        assert composite.console.get_min_level() is Severity.WARNING
        assert composite.file.get_min_level() is Severity.WARNING
        composite.emit(Severity.FATAL, 'kept')
        assert 'kept' in console_text(composite)
        assert 'kept' in file_text(composite)

    def test_set_min_level_by_name(self, composite):
        """Test a level name reaches both children as a severity."""
        composite.set_min_level('error')
        assert composite.console.get_min_level() is Severity.ERROR
        assert composite.file.get_min_level() is Severity.ERROR

    def test_composite_gate_applies_first(self, composite):
        """Test the composite filters even if a child would accept."""
        composite.set_min_level(Severity.ERROR)
        composite.console.set_min_level(Severity.DEBUG)
        composite.emit(Severity.WARNING, 'blocked')
        assert console_text(composite) == ''

    def test_stricter_child_wins(self, composite):
        """Test a child with a higher threshold still filters."""
        composite.console.set_min_level(Severity.ERROR)
        composite.emit(Severity.WARNING, 'file only')
        assert console_text(composite) == ''
        assert 'file only' in file_text(composite)

    def test_emit_without_file(self):
        """Test emit before init still reaches the console."""
        sink = CompositeSink(StringIO())
        sink.emit(Severity.ERROR, 'console only')
        assert 'console only' in console_text(sink)
        assert not sink.file.is_open


#
# Color and lifecycle forwarding
#


class TestCompositeForwarding:

    def test_color_forwards_to_console(self):
        """Test color toggles reach the console child."""
        sink = CompositeSink(StringIO())
        assert sink.is_color_enabled() is True
        sink.set_color_enabled(False)
        assert sink.is_color_enabled() is False
        assert sink.console.is_color_enabled() is False

    def test_init_opens_file(self, tmp_path):
        """Test init with a path opens the file child."""
        sink = CompositeSink(StringIO())
        sink.init(tmp_path / 'x.log')
        assert sink.file.is_open
        sink.close()
        assert not sink.file.is_open

    def test_init_without_parameter_ignored(self):
        """Test a parameterless init does nothing."""
        sink = CompositeSink(StringIO())
        sink.init()
        assert not sink.file.is_open

    def test_close_twice(self, composite):
        """Test closing twice does not fault."""
        composite.close()
        composite.close()
        assert not composite.file.is_open


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
