"""Tests for the notification listing, menu endpoint and kind parsing."""

from followfeed.models.notification import Notification
from followfeed.schemas.notification import (
    FollowNotification,
    NewPostNotification,
    UnknownNotification,
    kind_payload,
    parse_kind,
)


class TestNotificationEndpoints:

    def test_unread_listing_shape(self, client, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        client.post(f"/users/{b.id}/follow", headers=auth_headers(a))

        response = client.get("/api/notifications", headers=auth_headers(b))
        assert response.status_code == 200
        records = response.json()
        assert len(records) == 1
        assert records[0]["type"] == "follow"
        assert records[0]["data"] == {"follower_id": a.id, "follower_name": "A"}
        assert records[0]["read_at"] is None
        assert set(records[0]) >= {"id", "type", "data", "read_at"}

    def test_listing_respects_limit(self, client, make_user, auth_headers):
        b = make_user("B")
        for name in ("A", "C", "D"):
            follower = make_user(name)
            client.post(f"/users/{b.id}/follow", headers=auth_headers(follower))

        response = client.get("/api/notifications?limit=2", headers=auth_headers(b))
        assert len(response.json()) == 2

    def test_menu_renders_links_and_texts(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        client.post(f"/users/{b.id}/follow", headers=auth_headers(a))
        record = db_session.query(Notification).filter(Notification.user_id == b.id).one()

        response = client.get("/api/notifications/menu", headers=auth_headers(b))
        assert response.status_code == 200
        assert response.json() == [{"link": f"/users?read={record.id}", "text": "A followed you"}]


class TestNotificationKinds:

    def test_parse_follow(self):
        kind = parse_kind("follow", {"follower_id": 1, "follower_name": "A"})
        assert kind == FollowNotification(follower_id=1, follower_name="A")

    def test_parse_new_post(self):
        kind = parse_kind("new-post", {"following_id": 2, "following_name": "B", "post_id": 42})
        assert isinstance(kind, NewPostNotification)
        assert kind.post_id == 42

    def test_unknown_tag(self):
        kind = parse_kind("App\\Notifications\\Something", {"x": 1})
        assert isinstance(kind, UnknownNotification)
        assert kind.data == {"x": 1}

    def test_known_tag_with_broken_payload_is_unknown(self):
        assert isinstance(parse_kind("follow", {"follower_name": "A"}), UnknownNotification)

    def test_payload_excludes_tag(self):
        kind = NewPostNotification(following_id=2, following_name="B", post_id=42)
        assert kind_payload(kind) == {"following_id": 2, "following_name": "B", "post_id": 42}
