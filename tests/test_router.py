"""Tests API — router /funnel-builder + app (TestClient)."""
import pytest
from fastapi.testclient import TestClient

from funnel_builder.api import app


@pytest.fixture
def client():
    return TestClient(app)


BLOCKS = [
    {"id": "1", "type": "CONTAINER", "parentBlockId": None, "order": 0},
    {"id": "3", "type": "PARAGRAPH", "parentBlockId": "1", "order": 1, "props": {"text": "World"}},
    {"id": "2", "type": "HEADING", "parentBlockId": "1", "order": 0, "props": {"text": "Hi"}},
]


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestRender:
    def test_render_page(self, client):
        r = client.post("/funnel-builder/render", json={"page": {"name": "Landing", "blocks": BLOCKS}})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert r.text.startswith("<!DOCTYPE html>")
        assert "<div><h2>Hi</h2><p>World</p></div>" in r.text

    def test_render_blocks_fragment(self, client):
        r = client.post("/funnel-builder/render/blocks", json={"blocks": BLOCKS})
        assert r.status_code == 200
        assert r.text == "<div><h2>Hi</h2><p>World</p></div>"

    def test_render_blocks_device(self, client):
        blocks = [{
            "id": "h", "type": "HEADING", "props": {"text": "T"}, "styles": {"fontSize": 40},
            "breakpoints": [{"device": "MOBILE", "styles": {"fontSize": 24}}],
        }]
        r = client.post("/funnel-builder/render/blocks?device=MOBILE", json={"blocks": blocks})
        assert 'font-size: 24px' in r.text

    def test_render_blocks_with_section(self, client):
        r = client.post("/funnel-builder/render/blocks", json={
            "blocks": [{"id": "i", "type": "CONTAINER", "smartSectionInstanceId": "I1"}],
            "smartSections": [{"id": "S", "blocks": [{"id": "p", "type": "PARAGRAPH", "props": {"text": "x"}}]}],
            "smartSectionInstances": [{"id": "I1", "sectionId": "S"}],
        })
        assert r.text == "<div><p>x</p></div>"

    def test_render_invalid_device(self, client):
        r = client.post("/funnel-builder/render/blocks?device=WATCH", json={"blocks": BLOCKS})
        assert r.status_code == 422


class TestTree:
    def test_validate_ok(self, client):
        r = client.post("/funnel-builder/validate", json={"blocks": BLOCKS})
        assert r.json() == {"valid": True, "issues": []}

    def test_validate_reports_issues(self, client):
        r = client.post("/funnel-builder/validate", json={"blocks": [
            {"id": "h", "type": "HEADING"},
            {"id": "p", "type": "PARAGRAPH", "parentBlockId": "h"},
        ]})
        body = r.json()
        assert body["valid"] is False
        assert body["issues"][0]["code"] == "parent_cannot_have_children"

    def test_tree_nested_and_ordered(self, client):
        r = client.post("/funnel-builder/tree", json={"blocks": BLOCKS})
        roots = r.json()["roots"]
        assert len(roots) == 1
        assert [n["block"]["id"] for n in roots[0]["children"]["nodes"]] == ["2", "3"]
        assert roots[0]["children"]["kind"] == "owned"

    def test_tree_pending_section(self, client):
        r = client.post("/funnel-builder/tree", json={
            "blocks": [{"id": "i", "type": "CONTAINER", "smartSectionInstanceId": "I1"}],
            "smartSectionInstances": [{"id": "I1", "sectionId": "S"}],
        })
        children = r.json()["roots"][0]["children"]
        assert children["kind"] == "transcluded"
        assert children["state"] == "pending"

    def test_catalog(self, client):
        r = client.get("/funnel-builder/catalog")
        categories = r.json()["categories"]
        assert [c["category"] for c in categories][0] == "Layouts"
        types = {b["type"] for c in categories for b in c["blocks"]}
        assert {"HEADING", "POPUP", "FEATURE_GRID"} <= types
        heading = next(b for c in categories for b in c["blocks"] if b["type"] == "HEADING")
        assert heading["default_props"] == {"text": "Heading", "tag": "h2"}
        assert "properties" in heading["schema"]


class TestMutations:
    def test_create(self, client):
        r = client.post("/funnel-builder/blocks/create", json={
            "blocks": BLOCKS, "type": "BUTTON", "parentBlockId": "1", "props": {"text": "Go"},
        })
        assert r.status_code == 200
        body = r.json()
        assert body["block"]["order"] == 2
        assert body["block"]["parentBlockId"] == "1"
        assert len(body["blocks"]) == 4

    def test_create_invalid_parent(self, client):
        r = client.post("/funnel-builder/blocks/create", json={
            "blocks": BLOCKS, "type": "BUTTON", "parentBlockId": "2",
        })
        assert r.status_code == 422

    def test_move_cycle(self, client):
        r = client.post("/funnel-builder/blocks/move", json={
            "blocks": BLOCKS, "blockId": "1", "newParentBlockId": "1", "newOrder": 0,
        })
        assert r.status_code == 422

    def test_delete(self, client):
        r = client.post("/funnel-builder/blocks/delete", json={"blocks": BLOCKS, "blockId": "1"})
        assert r.json() == {"blocks": [], "removed": ["1", "3", "2"]}

    def test_delete_missing(self, client):
        r = client.post("/funnel-builder/blocks/delete", json={"blocks": BLOCKS, "blockId": "nope"})
        assert r.status_code == 404

    def test_duplicate(self, client):
        r = client.post("/funnel-builder/blocks/duplicate", json={"blocks": BLOCKS, "blockId": "1"})
        body = r.json()
        assert len(body["blocks"]) == 6
        assert body["block"]["order"] == 1

    def test_breakpoint(self, client):
        r = client.post("/funnel-builder/blocks/breakpoint", json={
            "blocks": BLOCKS, "blockId": "2", "device": "MOBILE", "styles": {"fontSize": 18},
        })
        bp = r.json()["block"]["breakpoints"]
        assert bp == [{"blockId": "2", "device": "MOBILE", "styles": {"fontSize": 18}}]

    def test_update(self, client):
        r = client.post("/funnel-builder/blocks/update", json={
            "blocks": BLOCKS, "blockId": "2", "props": {"text": "Bonjour"}, "visible": False,
        })
        assert r.status_code == 200
        block = r.json()["block"]
        assert block["props"] == {"text": "Bonjour"}
        assert block["visible"] is False
        assert block["order"] == 0

    def test_update_missing(self, client):
        r = client.post("/funnel-builder/blocks/update", json={"blocks": BLOCKS, "blockId": "nope", "locked": True})
        assert r.status_code == 404

    def test_numeric_ids(self, client):
        blocks = [
            {"id": 1, "type": "CONTAINER", "order": 0},
            {"id": 2, "type": "PARAGRAPH", "parentBlockId": 1, "order": 0, "props": {"text": "n"}},
        ]
        r = client.post("/funnel-builder/render/blocks", json={"blocks": blocks})
        assert r.status_code == 200
        assert r.text == "<div><p>n</p></div>"


class TestSmartSections:
    SECTION = {"id": "S", "name": "Hero", "blocks": [{"id": "h", "type": "HEADING", "props": {"text": "Hi"}}]}

    def test_insert_instance(self, client):
        r = client.post("/funnel-builder/smart-sections/insert-instance", json={
            "blocks": BLOCKS, "section": self.SECTION, "parentBlockId": "1",
        })
        assert r.status_code == 200
        body = r.json()
        assert body["instance"]["sectionId"] == "S"
        assert body["block"]["type"] == "CONTAINER"
        assert body["block"]["smartSectionInstanceId"] == body["instance"]["id"]
        assert body["block"]["props"] == {"smartSectionRef": True, "sectionName": "Hero"}
        assert body["block"]["order"] == 2
        assert len(body["blocks"]) == 4

    def test_insert_inside_smart_section_rejected(self, client):
        r = client.post("/funnel-builder/smart-sections/insert-instance", json={
            "blocks": [], "section": self.SECTION, "ownerSectionId": "OTHER",
        })
        assert r.status_code == 422
        assert "inside smart section OTHER" in r.json()["detail"]

    def test_insert_under_leaf_rejected(self, client):
        r = client.post("/funnel-builder/smart-sections/insert-instance", json={
            "blocks": BLOCKS, "section": self.SECTION, "parentBlockId": "2",
        })
        assert r.status_code == 422
