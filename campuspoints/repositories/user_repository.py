from typing import Optional
from sqlalchemy.orm import Session

from campuspoints.models.user import User as UserModel
from campuspoints.schemas.user import User as UserSchema
from campuspoints.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel, UserSchema]):
    """사용자 리포지토리"""

    def __init__(self, db: Session):
        super().__init__(UserModel, UserSchema, db)

    def get_by_email(self, email: str) -> Optional[UserSchema]:
        """이메일로 사용자 조회"""
        return self.get_by_field("email", email)

    def create_user(
        self, email: str, name: str, department: Optional[str] = None
    ) -> Optional[UserSchema]:
        return self.create(email=email, name=name, department=department)
