import pytest

from housepoints.models import AwardKind, Student
from housepoints.services import badge_service, roster_service
from housepoints.services.roster_service import RosterRuleViolation


def _seed(db):
    roster_service.add_group(db, name="Team EEG", group_id="g1")
    roster_service.add_group(db, name="Team Eye-Track", group_id="g2")
    roster_service.add_student(db, name="Alex", email="alex@student.nhlstenden.com", group_id="g1", student_id="s1")
    roster_service.add_student(db, name="Bo", email="bo@student.nhlstenden.com", group_id="g1", student_id="s2")
    roster_service.add_student(db, name="Casey", student_id="s3", group_id="g2")
    db.commit()


def test_add_student_starts_empty(db):
    student = roster_service.add_student(db, name="  Alex ", email="Alex@Student.NHLStenden.com")

    assert student.display_name == "Alex"
    assert student.points == 0
    assert student.badge_ids == []
    assert student.group_id is None
    assert student.student_id


@pytest.mark.parametrize("email", ["alex@gmail.com", "not-an-email", "alex@student.nhlstenden.com.evil.org"])
def test_add_student_rejects_foreign_email(db, email):
    with pytest.raises(RosterRuleViolation) as excinfo:
        roster_service.add_student(db, name="Alex", email=email)
    assert excinfo.value.status_code == 400


def test_add_student_rejects_duplicate_email(db):
    roster_service.add_student(db, name="Alex", email="alex@student.nhlstenden.com")

    with pytest.raises(RosterRuleViolation) as excinfo:
        roster_service.add_student(db, name="Other Alex", email="ALEX@student.nhlstenden.com")
    assert excinfo.value.status_code == 409


def test_add_student_requires_name(db):
    with pytest.raises(RosterRuleViolation):
        roster_service.add_student(db, name="   ")


def test_add_student_rejects_unknown_group(db):
    with pytest.raises(RosterRuleViolation) as excinfo:
        roster_service.add_student(db, name="Alex", group_id="ghost")
    assert excinfo.value.status_code == 404
    assert roster_service.list_students(db) == []


def test_email_valid_without_domain():
    assert roster_service.email_valid("someone@example.org", domain="")
    assert not roster_service.email_valid("", domain="")


def test_awards_allow_negative_totals(db):
    _seed(db)

    roster_service.award_to_student(db, student_id="s1", amount=-15, reason="Late")
    award = roster_service.award_to_group(db, group_id="g1", amount=-3, reason="Noise")
    db.commit()

    assert roster_service.get_student(db, "s1").points == -15
    assert award.kind == AwardKind.GROUP
    assert award.amount == -3
    assert roster_service.list_groups(db)[0].points == -3


def test_award_rejects_non_finite_amount(db):
    _seed(db)

    with pytest.raises(RosterRuleViolation):
        roster_service.award_to_student(db, student_id="s1", amount=float("nan"), reason="?")


def test_award_to_unknown_targets(db):
    with pytest.raises(RosterRuleViolation) as excinfo:
        roster_service.award_to_student(db, student_id="ghost", amount=1)
    assert excinfo.value.status_code == 404

    with pytest.raises(RosterRuleViolation) as excinfo:
        roster_service.award_to_group(db, group_id="ghost", amount=1)
    assert excinfo.value.status_code == 404


def test_award_log_keeps_most_recent_entries(db):
    _seed(db)

    for i in range(5):
        roster_service.award_to_student(db, student_id="s1", amount=1, reason=f"r{i}", history_limit=3)
    db.commit()

    awards = roster_service.list_awards(db, limit=10)
    assert [award.reason for award in awards] == ["r4", "r3", "r2"]
    assert roster_service.get_student(db, "s1").points == 5


def test_remove_student_prunes_individual_awards(db):
    _seed(db)
    roster_service.award_to_student(db, student_id="s1", amount=4, reason="Quiz")
    roster_service.award_to_student(db, student_id="s2", amount=2, reason="Quiz")
    roster_service.award_to_group(db, group_id="g1", amount=10, reason="Pitch")
    db.commit()

    pruned = roster_service.remove_student(db, "s1")
    db.commit()

    assert pruned == 1
    assert db.get(Student, "s1") is None
    remaining = {(a.kind, a.target_id) for a in roster_service.list_awards(db)}
    assert remaining == {(AwardKind.STUDENT, "s2"), (AwardKind.GROUP, "g1")}


def test_awards_for_student_include_group_awards(db):
    _seed(db)
    roster_service.award_to_student(db, student_id="s1", amount=4, reason="Quiz")
    roster_service.award_to_group(db, group_id="g1", amount=10, reason="Pitch")
    roster_service.award_to_group(db, group_id="g2", amount=8, reason="Demo")
    db.commit()

    reasons = [a.reason for a in roster_service.awards_for_student(db, "s1")]

    assert reasons == ["Pitch", "Quiz"]


def test_assign_group(db):
    _seed(db)

    roster_service.assign_group(db, "s3", "g1")
    assert roster_service.get_student(db, "s3").group_id == "g1"

    roster_service.assign_group(db, "s3", None)
    assert roster_service.get_student(db, "s3").group_id is None

    with pytest.raises(RosterRuleViolation):
        roster_service.assign_group(db, "s3", "ghost")


def test_remove_group_clears_membership(db):
    _seed(db)

    roster_service.remove_group(db, "g1")
    db.commit()

    assert roster_service.get_student(db, "s1").group_id is None
    assert [g.group_id for g in roster_service.list_groups(db)] == ["g2"]


def test_toggle_badge_moves_points(db):
    _seed(db)
    badge_service.add_badge(db, title="Helper", image="helper.png", requirement="Help a classmate", badge_id="b1")

    granted = roster_service.toggle_badge(db, student_id="s1", badge_id="b1", has_badge=True, badge_points=50)
    db.commit()
    student = roster_service.get_student(db, "s1")
    assert student.badge_ids == ["b1"]
    assert student.points == 50
    assert granted.reason == "Badge Helper"
    assert granted.badge_id == "b1"

    assert roster_service.toggle_badge(db, student_id="s1", badge_id="b1", has_badge=True) is None

    revoked = roster_service.toggle_badge(db, student_id="s1", badge_id="b1", has_badge=False, badge_points=50)
    db.commit()
    student = roster_service.get_student(db, "s1")
    assert student.badge_ids == []
    assert student.points == 0
    assert revoked.amount == -50


def test_badges_for_student_skip_deleted_definitions(db):
    _seed(db)
    badge_service.add_badge(db, title="Helper", image="helper.png", badge_id="b1")
    badge_service.add_badge(db, title="Speaker", image="speaker.png", badge_id="b2")
    roster_service.toggle_badge(db, student_id="s1", badge_id="b1", has_badge=True)
    roster_service.toggle_badge(db, student_id="s1", badge_id="b2", has_badge=True)
    db.commit()

    badge_service.remove_badge(db, "b1")
    db.commit()

    assert [b.badge_id for b in badge_service.badges_for_student(db, "s1")] == ["b2"]
    assert roster_service.get_student(db, "s1").badge_ids == ["b1", "b2"]


def test_add_badge_requires_title_and_image(db):
    with pytest.raises(RosterRuleViolation):
        badge_service.add_badge(db, title="", image="x.png")
    with pytest.raises(RosterRuleViolation):
        badge_service.add_badge(db, title="Helper", image="")


def test_set_bingo_answers_trims_and_drops_blanks(db):
    _seed(db)

    student = roster_service.set_bingo_answers(db, "s1", {"Q1": [" Drake ", "", "Adele"], "Q5": ["ignored"]})

    assert student.bingo == {"Q1": ["Drake", "Adele"], "Q2": [], "Q3": [], "Q4": []}
