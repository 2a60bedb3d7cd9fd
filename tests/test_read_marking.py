"""Tests for marking notifications read through the ?read=<id> query parameter."""

from followfeed.models.notification import Notification


def _follow_notification(client, db_session, auth_headers, follower, target):
    client.post(f"/users/{target.id}/follow", headers=auth_headers(follower))
    return db_session.query(Notification).filter(Notification.user_id == target.id).one()


class TestReadMarking:

    def test_read_param_marks_notification(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        record = _follow_notification(client, db_session, auth_headers, a, b)
        assert record.read_at is None

        response = client.get(f"/users?read={record.id}", headers=auth_headers(b))
        assert response.status_code == 200

        db_session.expire_all()
        assert db_session.get(Notification, record.id).read_at is not None

    def test_read_at_is_set_only_once(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        record = _follow_notification(client, db_session, auth_headers, a, b)

        client.get(f"/users?read={record.id}", headers=auth_headers(b))
        db_session.expire_all()
        first_read_at = db_session.get(Notification, record.id).read_at

        client.get(f"/users?read={record.id}", headers=auth_headers(b))
        db_session.expire_all()
        assert db_session.get(Notification, record.id).read_at == first_read_at

    def test_plain_requests_do_not_mark(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        record = _follow_notification(client, db_session, auth_headers, a, b)

        client.get("/users", headers=auth_headers(b))
        client.get("/api/notifications", headers=auth_headers(b))
        db_session.expire_all()
        assert db_session.get(Notification, record.id).read_at is None

    def test_cannot_mark_someone_elses_notification(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        record = _follow_notification(client, db_session, auth_headers, a, b)

        response = client.get(f"/users?read={record.id}", headers=auth_headers(a))
        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(Notification, record.id).read_at is None

    def test_malformed_id_is_ignored(self, client, make_user, auth_headers):
        b = make_user("B")
        response = client.get("/users?read=not-a-uuid", headers=auth_headers(b))
        assert response.status_code == 200

    def test_post_link_marks_new_post_notification(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        client.post(f"/users/{b.id}/follow", headers=auth_headers(a))
        post_id = client.post("/posts", json={"title": "T", "body": "B"}, headers=auth_headers(b)).json()["id"]
        record = db_session.query(Notification).filter(Notification.user_id == a.id).one()

        response = client.get(f"/posts/{post_id}?read={record.id}", headers=auth_headers(a))
        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(Notification, record.id).read_at is not None

    def test_read_notification_leaves_the_unread_list(self, client, db_session, make_user, auth_headers):
        a = make_user("A")
        b = make_user("B")
        record = _follow_notification(client, db_session, auth_headers, a, b)
        assert len(client.get("/api/notifications", headers=auth_headers(b)).json()) == 1

        client.get(f"/users?read={record.id}", headers=auth_headers(b))
        assert client.get("/api/notifications", headers=auth_headers(b)).json() == []
