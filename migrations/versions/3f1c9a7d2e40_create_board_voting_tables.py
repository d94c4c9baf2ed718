"""create board voting tables

Revision ID: 3f1c9a7d2e40
Revises:
Create Date: 2026-10-17 09:12:44.118302

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c9a7d2e40'
down_revision = None
branch_labels = None
depends_on = None


def _votable_columns():
    return [
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('voting_deadline', sa.DateTime(), nullable=True),
        sa.Column('minimum_quorum', sa.Integer(), nullable=True),
        sa.Column('requires_majority', sa.Boolean(), nullable=True),
        sa.Column('total_eligible_voters', sa.Integer(), nullable=True),
        sa.Column('is_unanimous', sa.Boolean(), nullable=True),
        sa.Column('passed_at', sa.DateTime(), nullable=True),
        sa.Column('voting_started_at', sa.DateTime(), nullable=True),
        sa.Column('voting_completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ),
    ]


def _vote_columns():
    return [
        sa.Column('vote', sa.String(length=10), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('voted_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('voter_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['voter_id'], ['users.id'], ),
    ]


def upgrade():
    op.create_table('users',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('username', sa.String(length=80), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('full_name', sa.String(length=200), nullable=True),
    sa.Column('position', sa.String(length=120), nullable=True),
    sa.Column('password_hash', sa.String(length=255), nullable=False),
    sa.Column('role', sa.String(length=20), nullable=False),
    sa.Column('active', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('email'),
    sa.UniqueConstraint('username')
    )
    op.create_table('meetings',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('meeting_date', sa.Date(), nullable=True),
    sa.Column('start_time', sa.Time(), nullable=True),
    sa.Column('end_time', sa.Time(), nullable=True),
    sa.Column('location', sa.String(length=200), nullable=True),
    sa.Column('created_by', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['created_by'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('resolutions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('resolution_number', sa.String(length=50), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('resolution_type', sa.String(length=50), nullable=True),
    sa.Column('meeting_id', sa.Integer(), nullable=True),
    sa.Column('effective_date', sa.Date(), nullable=True),
    sa.Column('votes_for', sa.Integer(), nullable=False),
    sa.Column('votes_against', sa.Integer(), nullable=False),
    sa.Column('votes_abstain', sa.Integer(), nullable=False),
    *_votable_columns(),
    sa.ForeignKeyConstraint(['meeting_id'], ['meetings.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('resolution_number')
    )
    op.create_table('minutes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('notes', sa.Text(), nullable=True),
    sa.Column('meeting_id', sa.Integer(), nullable=True),
    *_votable_columns(),
    sa.ForeignKeyConstraint(['meeting_id'], ['meetings.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('resolution_votes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('resolution_id', sa.Integer(), nullable=False),
    *_vote_columns(),
    sa.ForeignKeyConstraint(['resolution_id'], ['resolutions.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('resolution_id', 'voter_id', name='uq_resolution_voter')
    )
    op.create_table('minutes_votes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('minutes_id', sa.Integer(), nullable=False),
    *_vote_columns(),
    sa.ForeignKeyConstraint(['minutes_id'], ['minutes.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('minutes_id', 'voter_id', name='uq_minutes_voter')
    )


def downgrade():
    op.drop_table('minutes_votes')
    op.drop_table('resolution_votes')
    op.drop_table('minutes')
    op.drop_table('resolutions')
    op.drop_table('meetings')
    op.drop_table('users')
