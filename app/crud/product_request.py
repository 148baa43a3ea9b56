from sqlalchemy.orm import Session

from app.core.security.threat import ScreenedPayload
from app.models.product_request import ProductRequest
from app.schemas.product_request import ProductRequestCreate


def create_product_request(db: Session, payload: ScreenedPayload) -> ProductRequest:
    """検査済みの入力から追加リクエストを保存する。
    - ScreenedPayload 以外は受け付けない（未検査の入力を書き込まない）
    """
    if not isinstance(payload, ScreenedPayload):
        raise TypeError("create_product_request は ScreenedPayload のみ受け付けます")

    data = ProductRequestCreate.model_validate(payload.data)
    product_request = ProductRequest(
        name=data.name,
        contact=data.contact,
        product=data.product,
        article=data.article,
    )
    db.add(product_request)
    db.commit()
    db.refresh(product_request)
    return product_request

