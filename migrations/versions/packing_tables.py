"""Alembic 마이그레이션: packaging / packing_calculation_cache 테이블 추가"""
from alembic import op
import sqlalchemy as sa
from datetime import datetime


def upgrade():
    """박스 카탈로그 및 패킹 결과 캐시 테이블 생성"""
    op.create_table(
        'packaging',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('width', sa.Float(), nullable=False),
        sa.Column('height', sa.Float(), nullable=False),
        sa.Column('length', sa.Float(), nullable=False),
        sa.Column('max_weight', sa.Float(), nullable=False),
        sa.Column('dim_min', sa.Float(), nullable=False),
        sa.Column('dim_mid', sa.Float(), nullable=False),
        sa.Column('dim_max', sa.Float(), nullable=False),
        sa.Column('volume', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # 인덱스 추가
    op.create_index('idx_packaging_dims_weight', 'packaging', ['dim_min', 'dim_mid', 'dim_max', 'max_weight'])
    op.create_index('idx_packaging_volume_id', 'packaging', ['volume', 'id'])

    op.create_table(
        'packing_calculation_cache',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('selected_box_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, default=datetime.utcnow),
        sa.Column('updated_at', sa.DateTime(), nullable=False, default=datetime.utcnow),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['selected_box_id'], ['packaging.id'])
    )


def downgrade():
    """테이블 삭제"""
    op.drop_table('packing_calculation_cache')
    op.drop_index('idx_packaging_volume_id', table_name='packaging')
    op.drop_index('idx_packaging_dims_weight', table_name='packaging')
    op.drop_table('packaging')
