"""Tests for the workspace id codec."""

import pytest

from hywoma.models import Workspace
from hywoma.workspace_codec import decode, encode


class TestWorkspaceCodec:
    """Test mapping between coordinates and Hyprland workspace ids."""

    def test_encode_example(self):
        """Group 1, monitor 2, workspace 3 is id 112."""
        assert encode(Workspace(workspace=3, monitor=2, group=1)) == 112

    def test_decode_example(self):
        """Id 112 is group 1, monitor 2, workspace 3."""
        assert decode(112) == Workspace(workspace=3, monitor=2, group=1)

    def test_first_workspace(self):
        """Id 1 is the first workspace of the first monitor."""
        assert decode(1) == Workspace(workspace=1, monitor=1, group=0)
        assert encode(Workspace(workspace=1, monitor=1, group=0)) == 1

    def test_tenth_workspace_stays_on_monitor(self):
        """Workspace 10 uses digit 9, not a carry into the monitor digit."""
        assert encode(Workspace(workspace=10, monitor=1, group=0)) == 10
        assert decode(10) == Workspace(workspace=10, monitor=1, group=0)
        assert decode(11) == Workspace(workspace=1, monitor=2, group=0)

    def test_round_trip_all_coordinates(self):
        """Every group/monitor/workspace combination survives encode then decode."""
        for group in range(10):
            for monitor in range(1, 11):
                for workspace in range(1, 11):
                    ws = Workspace(workspace=workspace, monitor=monitor, group=group)
                    assert decode(encode(ws)) == ws

    @pytest.mark.parametrize("workspace_id", [1, 9, 55, 100, 101, 999, 1000])
    def test_ids_round_trip(self, workspace_id):
        """Ids in the addressable range survive decode then encode."""
        assert encode(decode(workspace_id)) == workspace_id

    def test_decode_does_not_validate(self):
        """Ids beyond group 9 are mapped mechanically, keeping the low digits."""
        assert decode(1001) == Workspace(workspace=1, monitor=1, group=0)
