from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.entitlement_model import EntitlementModel
from utils.errors import GrantError


class EntitlementService:
    def __init__(self, db: Session):
        self.db = db

    def grant(self, profile_id: str, purchase_info: Dict[str, Any]) -> EntitlementModel:
        """Upserts premium access for ``profile_id``.

        An existing record gets ``is_premium`` and ``purchase_info`` overwritten
        and keeps its ``created_at``; otherwise a new record is inserted.
        Concurrent grants for the same profile are last-write-wins.
        """
        now = datetime.now(timezone.utc)

        try:
            matched = self.db.query(EntitlementModel).filter(
                EntitlementModel.profile_id == profile_id
            ).update(
                {
                    EntitlementModel.is_premium: True,
                    EntitlementModel.purchase_info: purchase_info,
                    EntitlementModel.updated_at: now
                },
                synchronize_session=False
            )

            if matched == 0:
                self.db.add(EntitlementModel(
                    profile_id=profile_id,
                    is_premium=True,
                    purchase_info=purchase_info,
                    created_at=now,
                    updated_at=now
                ))
                self.db.commit()
                logger.info(f"New entitlement created with premium access for profileId: {profile_id}")
            else:
                self.db.commit()
                logger.info(f"Granted premium access for profileId: {profile_id}")

            return self.get(profile_id)

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error granting premium access for profileId {profile_id}: {e}")
            raise GrantError(f"Error granting premium access: {str(e)}", e)

    def get(self, profile_id: str) -> Optional[EntitlementModel]:
        self.db.expire_all()
        return self.db.query(EntitlementModel).filter(
            EntitlementModel.profile_id == profile_id
        ).first()
