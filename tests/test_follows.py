"""
Tests for follows and the follower lookup used on approval.
"""
from sqlalchemy import select, func

from app.domain.follows.service import (
    follow, followers_of_document, is_following, list_follows, unfollow,
)
from app.models.follow import Follow, FollowTarget


class TestFollow:
    """Idempotent follow and unfollow."""

    def test_follow_twice_keeps_one_row(self, db_session, student):
        first = follow(db_session, student.user_id, FollowTarget.subject, "Trac dia")
        second = follow(db_session, student.user_id, FollowTarget.subject, "Trac dia")
        assert first.id == second.id
        assert db_session.execute(select(func.count(Follow.id))).scalar_one() == 1
        assert is_following(db_session, student.user_id, FollowTarget.subject, "Trac dia")

    def test_same_value_different_type(self, db_session, student):
        follow(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo")
        follow(db_session, student.user_id, FollowTarget.subject, "Khoa Mo")
        assert len(list_follows(db_session, student.user_id)) == 2

    def test_unfollow(self, db_session, student):
        follow(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo")
        assert unfollow(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo") is True
        assert unfollow(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo") is False
        assert not is_following(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo")


class TestFollowers:
    """Who hears about a newly approved document."""

    def test_followers_of_document(self, db_session, student, other_student, moderator):
        follow(db_session, other_student.user_id, FollowTarget.user, student.user_id)
        follow(db_session, other_student.user_id, FollowTarget.faculty, "Khoa Mo")
        follow(db_session, moderator.user_id, FollowTarget.faculty, "Khoa Trac dia")
        follow(db_session, student.user_id, FollowTarget.faculty, "Khoa Mo")

        followers = followers_of_document(db_session, uploader_id=student.user_id, faculty="Khoa Mo")
        assert followers == [other_student.user_id]

    def test_subject_followers(self, db_session, student, moderator):
        follow(db_session, moderator.user_id, FollowTarget.subject, "GIS")
        assert followers_of_document(db_session, uploader_id=student.user_id, faculty="Khoa Mo",
                                     subject="GIS") == [moderator.user_id]
        assert followers_of_document(db_session, uploader_id=student.user_id, faculty="Khoa Mo") == []
