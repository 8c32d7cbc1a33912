# migrate_db.py
"""
Bring an existing database up to the current attempt constraints.

Older databases were created without the in-progress uniqueness index and the
one-answer-per-question constraint. Duplicates are resolved first (the newest
row wins) so the indexes can be built.
"""
from sqlalchemy import func, inspect, text

from mentortests import create_app
from mentortests.extensions import db
from mentortests.models import TestAttempt, TestSubmission
from mentortests.utils import now_utc

SUBMISSION_INDEX = 'unique_answer_per_question_idx'


def close_duplicate_in_progress():
    """Complete all but the newest in-progress attempt per (test, user)"""
    duplicates = db.session.query(
        TestAttempt.test_id,
        TestAttempt.user_id,
    ).filter(
        TestAttempt.completed_at.is_(None)
    ).group_by(
        TestAttempt.test_id, TestAttempt.user_id
    ).having(func.count(TestAttempt.id) > 1).all()

    closed = 0
    for test_id, user_id in duplicates:
        attempts = TestAttempt.query.filter_by(
            test_id=test_id,
            user_id=user_id,
            completed_at=None
        ).order_by(TestAttempt.started_at.desc(), TestAttempt.id.desc()).all()

        for stale in attempts[1:]:
            stale.completed_at = now_utc()
            closed += 1

    db.session.commit()
    return closed


def drop_duplicate_submissions():
    """Keep the latest answer per (attempt, question)"""
    duplicates = db.session.query(
        TestSubmission.attempt_id,
        TestSubmission.question_id,
    ).group_by(
        TestSubmission.attempt_id, TestSubmission.question_id
    ).having(func.count(TestSubmission.id) > 1).all()

    dropped = 0
    for attempt_id, question_id in duplicates:
        rows = TestSubmission.query.filter_by(
            attempt_id=attempt_id,
            question_id=question_id
        ).order_by(TestSubmission.submitted_at.desc(), TestSubmission.id.desc()).all()

        for stale in rows[1:]:
            db.session.delete(stale)
            dropped += 1

    db.session.commit()
    return dropped


def ensure_indexes():
    """Create the uniqueness indexes that are missing; returns their names"""
    inspector = inspect(db.engine)
    created = []

    attempt_indexes = {ix['name'] for ix in inspector.get_indexes(TestAttempt.__tablename__)}
    for index in TestAttempt.__table__.indexes:
        if index.unique and index.name not in attempt_indexes:
            index.create(bind=db.engine)
            created.append(index.name)

    submission_indexes = {ix['name'] for ix in inspector.get_indexes(TestSubmission.__tablename__)}
    has_constraint = any(
        c['name'] == 'unique_answer_per_question'
        for c in inspector.get_unique_constraints(TestSubmission.__tablename__)
    )
    if not has_constraint and SUBMISSION_INDEX not in submission_indexes:
        with db.engine.begin() as connection:
            connection.execute(text(
                f'CREATE UNIQUE INDEX IF NOT EXISTS {SUBMISSION_INDEX} '
                'ON test_submission (attempt_id, question_id)'
            ))
        created.append(SUBMISSION_INDEX)

    return created


def migrate_database(app=None):
    """Run every step; returns a report dict"""
    app = app or create_app()

    with app.app_context():
        print(f"\n{'='*50}")
        print("DATABASE MIGRATION")
        print(f"{'='*50}")

        closed = close_duplicate_in_progress()
        print(f"  Closed {closed} duplicate in-progress attempts")

        dropped = drop_duplicate_submissions()
        print(f"  Dropped {dropped} duplicate answers")

        created = ensure_indexes()
        for name in created:
            print(f"  Added index {name}")
        if not created:
            print("  - indexes exist")

        print(f"{'='*50}")
        print("MIGRATION COMPLETED")
        print(f"{'='*50}")

    return {'closed_attempts': closed, 'dropped_submissions': dropped, 'created_indexes': created}


if __name__ == '__main__':
    migrate_database()
