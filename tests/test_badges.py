"""
Tests for badge awarding and counter evaluation.
"""
import pytest
from sqlalchemy import select, func

from app.db.upsert import insert_or_ignore
from app.domain.badges.service import (
    achievement_counters, award_badge, award_by_type, evaluate, evaluate_quietly, list_user_badges,
)
from app.domain.documents.service import add_comment, rate_document
from app.domain.ledger.service import credit, debit
from app.models.badge import BadgeType
from app.models.document import DocumentStatus
from app.models.profile import Profile
from app.models.user_badge import UserBadge
from conftest import make_badge, make_document


def _user_badge_count(db, user_id, badge_id=None):
    q = select(func.count(UserBadge.id)).where(UserBadge.user_id == user_id)
    if badge_id is not None:
        q = q.where(UserBadge.badge_id == badge_id)
    return db.execute(q).scalar_one()


class TestInsertOrIgnore:
    """Conflict-tolerant inserts backing idempotent writes."""

    def test_second_insert_is_ignored(self, db_session):
        values = {"user_id": "u-1", "display_name": "A", "points": 0, "verified": False, "role": "student"}
        assert insert_or_ignore(db_session, Profile, values, conflict_on=["user_id"]) is True
        assert insert_or_ignore(db_session, Profile, values, conflict_on=["user_id"]) is False
        db_session.commit()
        assert db_session.execute(select(func.count(Profile.user_id))).scalar_one() == 1


class TestAward:
    """Idempotent awarding."""

    def test_award_twice_keeps_one_row(self, db_session, student):
        badge = make_badge(db_session, "Nguoi chia se", BadgeType.upload, requirement=1)
        assert award_badge(db_session, student.user_id, badge.id) is True
        assert award_badge(db_session, student.user_id, badge.id) is False
        assert _user_badge_count(db_session, student.user_id, badge.id) == 1

    def test_award_by_type_rejects_counter_types(self, db_session, student):
        with pytest.raises(ValueError):
            award_by_type(db_session, student.user_id, BadgeType.upload)

    def test_award_by_type_grants_all_of_type(self, db_session, student):
        a = make_badge(db_session, "Da xac thuc", BadgeType.verified)
        b = make_badge(db_session, "Sinh vien xac thuc", BadgeType.verified)
        awarded = award_by_type(db_session, student.user_id, BadgeType.verified)
        assert {x.id for x in awarded} == {a.id, b.id}
        assert award_by_type(db_session, student.user_id, BadgeType.verified) == []


class TestEvaluate:
    """Counter-driven badges."""

    def test_counters(self, db_session, student, other_student):
        doc = make_document(db_session, other_student.user_id, status=DocumentStatus.approved)
        make_document(db_session, student.user_id, status=DocumentStatus.approved)
        make_document(db_session, student.user_id, status=DocumentStatus.pending)
        rate_document(db_session, doc.id, student.user_id, 4)
        add_comment(db_session, doc.id, student.user_id, "Tai lieu rat hay")
        add_comment(db_session, doc.id, student.user_id, "Cam on ban")
        credit(db_session, student.user_id, 15)

        counters = achievement_counters(db_session, student.user_id)
        assert counters[BadgeType.upload] == 1
        assert counters[BadgeType.rating] == 1
        assert counters[BadgeType.comment] == 2
        assert counters[BadgeType.points] == 15

    def test_five_approved_uploads_grant_badge_once(self, db_session, student):
        badge = make_badge(db_session, "Coc Dong", BadgeType.upload, requirement=5)
        for i in range(5):
            make_document(db_session, student.user_id, title=f"De thi {i}", status=DocumentStatus.approved)

        awarded = evaluate(db_session, student.user_id)
        assert [b.id for b in awarded] == [badge.id]
        assert evaluate(db_session, student.user_id) == []
        assert _user_badge_count(db_session, student.user_id, badge.id) == 1

    def test_threshold_not_met(self, db_session, student):
        make_badge(db_session, "Coc Dong", BadgeType.upload, requirement=5)
        for i in range(4):
            make_document(db_session, student.user_id, title=f"De thi {i}", status=DocumentStatus.approved)
        make_document(db_session, student.user_id, title="Cho duyet", status=DocumentStatus.pending)
        assert evaluate(db_session, student.user_id) == []

    def test_points_badge_is_never_revoked(self, db_session, student):
        badge = make_badge(db_session, "Thanh vien tich cuc", BadgeType.points, requirement=50)
        credit(db_session, student.user_id, 60)
        assert [b.id for b in evaluate(db_session, student.user_id)] == [badge.id]

        debit(db_session, student.user_id, 60)
        evaluate(db_session, student.user_id)
        assert _user_badge_count(db_session, student.user_id, badge.id) == 1

    def test_granted_types_ignored_by_evaluation(self, db_session, student):
        make_badge(db_session, "Da xac thuc", BadgeType.verified, requirement=0)
        make_badge(db_session, "Thanh vien moi 2", BadgeType.join, requirement=0)
        assert evaluate(db_session, student.user_id) == []
        assert _user_badge_count(db_session, student.user_id) == 0

    def test_comment_badge(self, db_session, student):
        badge = make_badge(db_session, "Nha binh luan", BadgeType.comment, requirement=2)
        doc = make_document(db_session, student.user_id, status=DocumentStatus.approved)
        add_comment(db_session, doc.id, student.user_id, "Mot")
        assert evaluate(db_session, student.user_id) == []
        add_comment(db_session, doc.id, student.user_id, "Hai")
        assert [b.id for b in evaluate(db_session, student.user_id)] == [badge.id]

    def test_list_user_badges_newest_first(self, db_session, student):
        first = make_badge(db_session, "Mot", BadgeType.points, requirement=0)
        second = make_badge(db_session, "Hai", BadgeType.rating, requirement=0)
        award_badge(db_session, student.user_id, first.id)
        award_badge(db_session, student.user_id, second.id)
        owned = list_user_badges(db_session, student.user_id)
        assert [ub.badge_id for ub in owned] == [second.id, first.id]
        assert owned[0].badge.name == "Hai"


class TestEvaluateQuietly:
    """Fire-and-forget evaluation used by rating and comment handlers."""

    def test_failure_is_logged_not_raised(self, db_session, student, monkeypatch, caplog):
        from app.domain.badges import service

        def boom(*args, **kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr(service, "evaluate", boom)
        with caplog.at_level("ERROR", logger="badges"):
            assert evaluate_quietly(db_session, student.user_id) == []
        assert "badge evaluation failed" in caplog.text
