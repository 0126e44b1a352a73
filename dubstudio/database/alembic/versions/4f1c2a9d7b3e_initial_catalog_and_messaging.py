"""initial catalog and messaging

Revision ID: 4f1c2a9d7b3e
Revises:
Create Date: 2025-11-02 14:21:07.118304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from dubstudio.common.settings import get_settings

# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = get_settings().db_schema


def _fk(table: str) -> str:
    return f"{SCHEMA}.{table}.id" if SCHEMA else f"{table}.id"


def _service_columns() -> list:
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=True),
    ]


def upgrade() -> None:
    project_type = sa.Enum('game', 'anime', name='project_type')
    role_in_project = sa.Enum(
        'VOICE_ACTOR', 'DIRECTOR', 'TRANSLATOR', 'MIX_ENGINEER', 'PROJECT_MANAGER', name='role_in_project'
    )
    user_role = sa.Enum('user', 'admin', name='user_role')

    # 1) Lookup tables
    op.create_table(
        'category',
        *_service_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_category')),
        sa.UniqueConstraint('name', name='uq_category_name'),
        sa.UniqueConstraint('slug', name='uq_category_slug'),
        schema=SCHEMA,
    )
    op.create_table(
        'dubbing_artist',
        *_service_columns(),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('image_public_id', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_dubbing_artist')),
        schema=SCHEMA,
    )
    op.create_index('ix_dubbing_artist_last_name', 'dubbing_artist', ['last_name'], unique=False, schema=SCHEMA)

    # 2) Projects and what hangs off them
    op.create_table(
        'project',
        *_service_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('type', project_type, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cover_image_public_id', sa.String(length=255), nullable=True),
        sa.Column('banner_image_public_id', sa.String(length=255), nullable=True),
        sa.Column('release_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_published', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=True),
        sa.Column('external_watch_url', sa.Text(), nullable=True),
        sa.Column('trailer_url', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_project')),
        sa.UniqueConstraint('slug', name='uq_project_slug'),
        schema=SCHEMA,
    )
    op.create_index('ix_project_type', 'project', ['type'], unique=False, schema=SCHEMA)

    op.create_table(
        'character',
        *_service_columns(),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_public_id', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['project_id'], [_fk('project')],
                                name=op.f('fk_character_project_id_project'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_character')),
        sa.UniqueConstraint('project_id', 'name', name='uq_character_project_name'),
        schema=SCHEMA,
    )
    op.create_index('ix_character_project_id', 'character', ['project_id'], unique=False, schema=SCHEMA)

    op.create_table(
        'project_category',
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], [_fk('project')],
                                name=op.f('fk_project_category_project_id_project'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], [_fk('category')],
                                name=op.f('fk_project_category_category_id_category'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('project_id', 'category_id', name=op.f('pk_project_category')),
        schema=SCHEMA,
    )
    op.create_index('ix_project_category_category_id', 'project_category', ['category_id'], unique=False, schema=SCHEMA)

    # 3) Assignments (+ voiced characters)
    op.create_table(
        'project_assignment',
        *_service_columns(),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('artist_id', sa.Integer(), nullable=False),
        sa.Column('role', role_in_project, nullable=False),
        sa.ForeignKeyConstraint(['project_id'], [_fk('project')],
                                name=op.f('fk_project_assignment_project_id_project'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['artist_id'], [_fk('dubbing_artist')],
                                name=op.f('fk_project_assignment_artist_id_dubbing_artist'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_project_assignment')),
        sa.UniqueConstraint('project_id', 'artist_id', 'role', name='uq_project_assignment_project_artist_role'),
        schema=SCHEMA,
    )
    op.create_index('ix_project_assignment_artist_id', 'project_assignment', ['artist_id'], unique=False, schema=SCHEMA)

    op.create_table(
        'assignment_character',
        sa.Column('assignment_id', sa.Integer(), nullable=False),
        sa.Column('character_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['assignment_id'], [_fk('project_assignment')],
                                name=op.f('fk_assignment_character_assignment_id_project_assignment'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['character_id'], [_fk('character')],
                                name=op.f('fk_assignment_character_character_id_character'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('assignment_id', 'character_id', name=op.f('pk_assignment_character')),
        schema=SCHEMA,
    )
    op.create_index('ix_assignment_character_character_id', 'assignment_character', ['character_id'],
                    unique=False, schema=SCHEMA)

    # 4) Users and direct messages
    op.create_table(
        'users',
        *_service_columns(),
        sa.Column('username', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', user_role, server_default=sa.text("'user'"), nullable=False),
        sa.Column('avatar_public_id', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        schema=SCHEMA,
    )
    op.create_table(
        'message',
        *_service_columns(),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('recipient_id', sa.Integer(), nullable=False),
        sa.Column('subject', sa.String(length=200), nullable=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by_sender', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('deleted_by_recipient', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.ForeignKeyConstraint(['sender_id'], [_fk('users')],
                                name=op.f('fk_message_sender_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], [_fk('users')],
                                name=op.f('fk_message_recipient_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_message')),
        schema=SCHEMA,
    )
    op.create_index('ix_message_recipient_id', 'message', ['recipient_id'], unique=False, schema=SCHEMA)
    op.create_index('ix_message_sender_id', 'message', ['sender_id'], unique=False, schema=SCHEMA)


def downgrade() -> None:
    op.drop_index('ix_message_sender_id', table_name='message', schema=SCHEMA)
    op.drop_index('ix_message_recipient_id', table_name='message', schema=SCHEMA)
    op.drop_table('message', schema=SCHEMA)
    op.drop_table('users', schema=SCHEMA)
    op.drop_index('ix_assignment_character_character_id', table_name='assignment_character', schema=SCHEMA)
    op.drop_table('assignment_character', schema=SCHEMA)
    op.drop_index('ix_project_assignment_artist_id', table_name='project_assignment', schema=SCHEMA)
    op.drop_table('project_assignment', schema=SCHEMA)
    op.drop_index('ix_project_category_category_id', table_name='project_category', schema=SCHEMA)
    op.drop_table('project_category', schema=SCHEMA)
    op.drop_index('ix_character_project_id', table_name='character', schema=SCHEMA)
    op.drop_table('character', schema=SCHEMA)
    op.drop_index('ix_project_type', table_name='project', schema=SCHEMA)
    op.drop_table('project', schema=SCHEMA)
    op.drop_index('ix_dubbing_artist_last_name', table_name='dubbing_artist', schema=SCHEMA)
    op.drop_table('dubbing_artist', schema=SCHEMA)
    op.drop_table('category', schema=SCHEMA)

    bind = op.get_bind()
    for enum_name in ('user_role', 'role_in_project', 'project_type'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
