"""
HTTP tests: authentication boundary, error mapping and the main user flows.
"""
from app.core.settings import APPROVAL_REWARD_POINTS
from app.models.badge import BadgeType
from app.models.document import DocumentStatus
from conftest import headers_for, make_badge, make_document, make_item, set_points


class TestAuthBoundary:
    """Bearer tokens from the identity provider."""

    def test_missing_token(self, client):
        assert client.get("/profile").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/profile", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_first_request_creates_profile_with_join_badge(self, client, db_session):
        make_badge(db_session, "Thanh vien moi", BadgeType.join, icon="UserPlus", color="#22c55e")
        headers = headers_for("new-user", email="sv2024@humg.edu.vn")

        response = client.get("/profile", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "new-user"
        assert data["display_name"] == "sv2024"
        assert data["points"] == 0
        assert data["role"] == "student"

        badges = client.get("/badges/my", headers=headers).json()
        assert [b["badge"]["name"] for b in badges] == ["Thanh vien moi"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestProfileEndpoints:
    """Own profile and public profiles."""

    def test_update_profile(self, client, auth_headers):
        response = client.put("/profile", json={"faculty": "Khoa Mo", "bio": "K66"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["faculty"] == "Khoa Mo"

    def test_update_rejects_short_name(self, client, auth_headers):
        response = client.put("/profile", json={"display_name": "A"}, headers=auth_headers)
        assert response.status_code == 422

    def test_public_profile_not_found(self, client):
        assert client.get("/profile/ghost").status_code == 404


class TestShopEndpoints:
    """Purchases map business errors to 400."""

    def test_purchase_success(self, client, db_session, student, auth_headers):
        item = make_item(db_session, "Premium 1 thang", cost=100)
        set_points(db_session, student.user_id, 100)

        response = client.post("/shop/purchase", json={"item_id": item.id}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["points_spent"] == 100
        assert client.get("/profile", headers=auth_headers).json()["points"] == 0

        history = client.get("/shop/purchases", headers=auth_headers).json()
        assert [p["item"]["name"] for p in history] == ["Premium 1 thang"]

    def test_purchase_not_enough_points(self, client, db_session, student, auth_headers):
        item = make_item(db_session, "Premium 1 thang", cost=100)
        set_points(db_session, student.user_id, 50)

        response = client.post("/shop/purchase", json={"item_id": item.id}, headers=auth_headers)
        assert response.status_code == 400
        assert "Not enough points" in response.json()["detail"]
        assert client.get("/profile", headers=auth_headers).json()["points"] == 50
        assert client.get("/shop/purchases", headers=auth_headers).json() == []

    def test_purchase_unknown_item(self, client, auth_headers):
        response = client.post("/shop/purchase", json={"item_id": 999}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Item not found"

    def test_catalog_is_public(self, client, db_session):
        make_item(db_session, "Template Excel", cost=30)
        assert [i["name"] for i in client.get("/shop").json()] == ["Template Excel"]


class TestBadgeEndpoints:
    """Catalog with ownership and rarity."""

    def test_catalog_marks_owned(self, client, db_session, student, other_student, auth_headers):
        badge = make_badge(db_session, "Thanh vien tich cuc", BadgeType.points, requirement=0)
        make_badge(db_session, "Chuyen gia", BadgeType.upload, requirement=20)
        from app.domain.badges.service import award_badge
        award_badge(db_session, student.user_id, badge.id)

        catalog = {b["name"]: b for b in client.get("/badges", headers=auth_headers).json()}
        assert catalog["Thanh vien tich cuc"]["owned"] is True
        assert catalog["Thanh vien tich cuc"]["rarity_pct"] == 50.0
        assert catalog["Chuyen gia"]["owned"] is False
        assert catalog["Chuyen gia"]["rarity_pct"] == 0.0

    def test_catalog_is_public(self, client, db_session, student):
        badge = make_badge(db_session, "Thanh vien tich cuc", BadgeType.points, requirement=0)
        from app.domain.badges.service import award_badge
        award_badge(db_session, student.user_id, badge.id)

        response = client.get("/badges")
        assert response.status_code == 200
        [entry] = response.json()
        assert entry["owned"] is False
        assert entry["rarity_pct"] == 100.0

    def test_catalog_rejects_bad_token(self, client):
        response = client.get("/badges", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestDocumentEndpoints:
    """Upload, detail, rating and comments."""

    def test_upload_is_pending(self, client, auth_headers):
        payload = {"title": "De thi Co hoc", "faculty": "Khoa Mo", "category": "De thi", "tags": ["co hoc"]}
        response = client.post("/documents", json=payload, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["status"] == "pending"

    def test_upload_requires_title(self, client, auth_headers):
        payload = {"title": "  ", "faculty": "Khoa Mo", "category": "De thi"}
        assert client.post("/documents", json=payload, headers=auth_headers).status_code == 422

    def test_detail_counts_view(self, client, db_session, student):
        doc = make_document(db_session, student.user_id, status=DocumentStatus.approved)
        client.get(f"/documents/{doc.id}")
        data = client.get(f"/documents/{doc.id}").json()
        assert data["view_count"] == 2
        assert data["uploader_profile"]["user_id"] == student.user_id

    def test_detail_not_found(self, client):
        assert client.get("/documents/404").status_code == 404

    def test_rate_and_my_rating(self, client, db_session, student, auth_headers):
        doc = make_document(db_session, student.user_id, status=DocumentStatus.approved)
        assert client.get(f"/documents/{doc.id}/my-rating", headers=auth_headers).json() is None
        assert client.post(f"/documents/{doc.id}/rate", json={"score": 4}, headers=auth_headers).status_code == 200
        assert client.get(f"/documents/{doc.id}/my-rating", headers=auth_headers).json()["score"] == 4

    def test_rate_out_of_range(self, client, db_session, student, auth_headers):
        doc = make_document(db_session, student.user_id, status=DocumentStatus.approved)
        assert client.post(f"/documents/{doc.id}/rate", json={"score": 6}, headers=auth_headers).status_code == 422

    def test_comment_triggers_comment_badge(self, client, db_session, student, auth_headers):
        make_badge(db_session, "Nha binh luan", BadgeType.comment, requirement=1, icon="MessageCircle")
        doc = make_document(db_session, student.user_id, status=DocumentStatus.approved)
        response = client.post(f"/documents/{doc.id}/comments", json={"content": "Hay"}, headers=auth_headers)
        assert response.status_code == 201
        names = [b["badge"]["name"] for b in client.get("/badges/my", headers=auth_headers).json()]
        assert "Nha binh luan" in names

    def test_search_needs_two_characters(self, client, db_session, student):
        make_document(db_session, student.user_id, title="Trac dia", status=DocumentStatus.approved)
        assert client.get("/documents/search", params={"q": "T"}).json() == []
        assert [d["title"] for d in client.get("/documents/search", params={"q": "trac"}).json()] == ["Trac dia"]


class TestAdminEndpoints:
    """Moderation requires a staff role."""

    def test_student_forbidden(self, client, auth_headers):
        assert client.get("/admin/stats", headers=auth_headers).status_code == 403

    def test_approve_twice_credits_once(self, client, db_session, student, auth_headers, admin_headers):
        doc = make_document(db_session, student.user_id)
        first = client.post(f"/admin/documents/{doc.id}/approve", headers=admin_headers)
        second = client.post(f"/admin/documents/{doc.id}/approve", headers=admin_headers)
        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["status"] == "approved"
        assert client.get("/profile", headers=auth_headers).json()["points"] == APPROVAL_REWARD_POINTS

    def test_approve_rejected_conflicts(self, client, db_session, student, moderator_headers):
        doc = make_document(db_session, student.user_id)
        assert client.post(f"/admin/documents/{doc.id}/reject", json={"reason": "Trung lap"},
                           headers=moderator_headers).status_code == 200
        assert client.post(f"/admin/documents/{doc.id}/approve", headers=moderator_headers).status_code == 409

    def test_approve_missing(self, client, admin_headers):
        assert client.post("/admin/documents/404/approve", headers=admin_headers).status_code == 404

    def test_verify_user(self, client, db_session, student, admin_headers):
        make_badge(db_session, "Da xac thuc", BadgeType.verified, icon="CheckCircle")
        response = client.post(f"/admin/users/{student.user_id}/verify", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["verified"] is True

    def test_moderator_cannot_set_roles(self, client, student, moderator_headers, admin_headers):
        url = f"/admin/users/{student.user_id}/role"
        assert client.put(url, json={"role": "lecturer"}, headers=moderator_headers).status_code == 403
        response = client.put(url, json={"role": "lecturer"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "lecturer"

    def test_site_stats_public(self, client, db_session, student):
        make_document(db_session, student.user_id, status=DocumentStatus.approved)
        assert client.get("/stats").json()["total_documents"] == 1


class TestForumEndpoints:
    """Threads and replies over HTTP."""

    def test_locked_thread_reply_conflicts(self, client, auth_headers, admin_headers):
        created = client.post("/forum/threads", json={"title": "Hoi", "content": "Noi dung"}, headers=auth_headers)
        assert created.status_code == 201
        thread_id = created.json()["id"]

        client.post(f"/admin/forum/threads/{thread_id}/lock", json={"value": True}, headers=admin_headers)
        response = client.post(f"/forum/threads/{thread_id}/replies", json={"content": "Tra loi"},
                               headers=auth_headers)
        assert response.status_code == 409

    def test_best_answer_forbidden_for_non_author(self, client, auth_headers, other_student):
        other_headers = headers_for(other_student.user_id)
        thread_id = client.post("/forum/threads", json={"title": "Hoi", "content": "Noi dung"},
                                headers=auth_headers).json()["id"]
        reply_id = client.post(f"/forum/threads/{thread_id}/replies", json={"content": "Tra loi"},
                               headers=other_headers).json()["id"]
        assert client.post(f"/forum/replies/{reply_id}/best-answer", headers=other_headers).status_code == 403
        assert client.post(f"/forum/replies/{reply_id}/best-answer", headers=auth_headers).status_code == 200

    def test_best_answer_missing_reply(self, client, auth_headers):
        assert client.post("/forum/replies/404/best-answer", headers=auth_headers).status_code == 404


class TestNotificationEndpoints:
    """Inbox fed by moderation and badge events."""

    def test_approval_shows_up_in_inbox(self, client, db_session, student, auth_headers, admin_headers):
        doc = make_document(db_session, student.user_id, title="Giao trinh Surpac")
        client.post(f"/admin/documents/{doc.id}/approve", headers=admin_headers)

        assert client.get("/notifications/unread-count", headers=auth_headers).json() == {"count": 1}
        [notification] = client.get("/notifications", headers=auth_headers).json()
        assert notification["type"] == "document_approved"
        assert notification["link"] == f"/documents/{doc.id}"

        response = client.post(f"/notifications/{notification['id']}/read", headers=auth_headers)
        assert response.json() == {"success": True}
        assert client.get("/notifications/unread-count", headers=auth_headers).json() == {"count": 0}

    def test_read_all(self, client, db_session, student, auth_headers, admin_headers):
        for title in ["Mot", "Hai"]:
            doc = make_document(db_session, student.user_id, title=title)
            client.post(f"/admin/documents/{doc.id}/reject", json={"reason": "Trung lap"}, headers=admin_headers)

        response = client.post("/notifications/read-all", headers=auth_headers)
        assert response.json() == {"success": True, "updated": 2}
        assert client.get("/notifications/unread-count", headers=auth_headers).json() == {"count": 0}

    def test_cannot_read_someone_elses(self, client, db_session, student, other_student, admin_headers):
        doc = make_document(db_session, student.user_id)
        client.post(f"/admin/documents/{doc.id}/approve", headers=admin_headers)
        owner_headers = headers_for(student.user_id)
        [notification] = client.get("/notifications", headers=owner_headers).json()

        other_headers = headers_for(other_student.user_id)
        response = client.post(f"/notifications/{notification['id']}/read", headers=other_headers)
        assert response.status_code == 404

    def test_requires_token(self, client):
        assert client.get("/notifications").status_code == 401


class TestFollowEndpoints:
    """Following faculties, subjects and users."""

    def test_follow_list_and_unfollow(self, client, auth_headers):
        body = {"target_type": "faculty", "target_value": "Khoa Mo"}
        first = client.post("/follows", json=body, headers=auth_headers)
        second = client.post("/follows", json=body, headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]

        follows = client.get("/follows", headers=auth_headers).json()
        assert [(f["target_type"], f["target_value"]) for f in follows] == [("faculty", "Khoa Mo")]
        status = client.get("/follows/status", params=body, headers=auth_headers).json()
        assert status == {"following": True}

        response = client.request("DELETE", "/follows", json=body, headers=auth_headers)
        assert response.json() == {"success": True, "removed": True}
        assert client.get("/follows", headers=auth_headers).json() == []

    def test_unknown_target_type(self, client, auth_headers):
        body = {"target_type": "planet", "target_value": "Mars"}
        assert client.post("/follows", json=body, headers=auth_headers).status_code == 422
