import pytest

from graphwalk.config import ViewerSettings
from graphwalk.session import GraphSession
from graphwalk.viewer import create_app


@pytest.fixture
def app_session():
    return GraphSession(width=1000, height=700)


@pytest.fixture
def client(app_session):
    app = create_app(app_session, ViewerSettings())
    app.config["TESTING"] = True
    return app.test_client()


def step_until_done(client):
    frames = []
    for _ in range(100):
        frame = client.post("/api/step").get_json()["frame"]
        if frame is None:
            break
        frames.append(frame)
        if frame["done"]:
            break
    return frames


def test_index_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Graph Traversal Canvas" in res.data
    assert b"width: 1000px" in res.data


def test_state_and_svg(client):
    state = client.get("/api/state").get_json()
    assert len(state["nodes"]) == 22
    assert state["info"]["components"] == 1

    res = client.get("/api/svg")
    assert res.mimetype == "image/svg+xml"
    assert res.data.count(b"<circle ") == 22


def test_traverse_without_selection_conflicts(client):
    res = client.post("/api/traverse", json={"kind": "bfs"})
    assert res.status_code == 409
    assert "select" in res.get_json()["error"]


def test_bfs_animation_through_steps(client):
    client.post("/api/select", json={"node": 1})
    res = client.post("/api/traverse", json={"kind": "bfs"})
    assert res.get_json()["started"] is True

    frames = step_until_done(client)
    assert frames[0]["active"] == [1]
    assert frames[0]["delay"] == pytest.approx(0.9)
    assert frames[-1]["done"] is True
    assert len(frames[-1]["visited"]) == 22
    assert client.post("/api/step").get_json()["frame"] is None


def test_dfs_with_explicit_node(client):
    res = client.post("/api/traverse", json={"kind": "dfs", "node": 20})
    assert res.status_code == 200
    frames = step_until_done(client)
    assert [f["active"] for f in frames] == [[20], []]


def test_delete_edge_and_restore(client, app_session):
    client.post("/api/select", json={"node": 11})
    client.post("/api/select", json={"node": 12, "toggle": True})
    info = client.post("/api/key", json={"key": "Enter"}).get_json()["info"]
    assert info["components"] == 2
    assert info["selected"] == []
    assert not app_session.store.has_edge(11, 12)

    info = client.post("/api/restore").get_json()["info"]
    assert info["components"] == 1
    assert app_session.store.has_edge(11, 12)


def test_pointer_and_tooltip(client, app_session):
    x, y = app_session.viewport.world_to_screen(*app_session.positions[7])
    info = client.post("/api/pointer", json={"button": 0, "x": x, "y": y}).get_json()["info"]
    assert info["selected"] == [7]

    data = client.get("/api/tooltip", query_string={"x": x, "y": y}).get_json()
    assert data == {"node": 7, "text": "Node 7 - out: 2 - in: 1"}
    assert client.get("/api/tooltip", query_string={"node": 1}).get_json()["text"].startswith("Node 1")


def test_middle_click_starts_animation(client, app_session):
    x, y = app_session.viewport.world_to_screen(*app_session.positions[16])
    res = client.post("/api/pointer", json={"button": 1, "x": x, "y": y})
    assert res.get_json()["started"] is True
    assert [f["active"] for f in step_until_done(client)][:2] == [[16], [17]]


def test_view_endpoints(client, app_session):
    view = client.post("/api/pan", json={"dx": 10, "dy": -5}).get_json()["view"]
    assert view == app_session.viewport.snapshot()
    view = client.post("/api/wheel", json={"delta": -200, "x": 100, "y": 100}).get_json()["view"]
    assert view["scale"] > 0
    view = client.post("/api/resize", json={"width": 1400, "height": 900}).get_json()["view"]
    assert app_session.width == 1400


def test_clear(client, app_session):
    client.post("/api/select", json={"node": 3})
    client.post("/api/traverse", json={"kind": "bfs"})
    client.post("/api/step")
    info = client.post("/api/clear").get_json()["info"]
    assert info["visited"] == 0
    assert info["selected"] == []


def test_bad_input(client):
    assert client.post("/api/pointer", json={"x": "left"}).status_code == 400
    assert client.post("/api/key", json={}).status_code == 400
    assert client.post("/api/traverse", json={"kind": "astar"}).status_code == 400
    res = client.post("/api/select", json={"node": 99})
    assert res.status_code == 404
    assert res.get_json()["error"] == "unknown node: 99"
