from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import logging
from app.core.config import settings

# ロガーの設定
logger = logging.getLogger(__name__)

# エンジン作成
engine = create_engine(
    settings.database_url,
    connect_args=settings.get_database_connect_args(),
    pool_pre_ping=True,
)
logger.info("監査ストアに接続: %s", engine.url.render_as_string(hide_password=True))

# セッション作成
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Baseクラスを作成
Base = declarative_base()


def init_db() -> None:
    """テーブル作成（もしテーブルがまだない場合）"""
    # モデルをメタデータに登録してから作成する
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
