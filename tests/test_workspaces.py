from parapet.widget import WorkspacesData
from parapet.widgets.workspaces import WorkspacesWidget


def test_workspaces_stub_returns_valid_data():
    data = WorkspacesWidget("workspaces").update()
    assert data.count >= 1
    assert data.active < data.count


def test_workspaces_stub_exact_placeholder():
    assert WorkspacesWidget("workspaces").update() == WorkspacesData(count=1, active=0, names=())


def test_workspaces_name_is_kept():
    assert WorkspacesWidget("workspaces").name == "workspaces"