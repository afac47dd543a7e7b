"""SQLAlchemy database models for usersapi."""

from sqlalchemy import BigInteger, Column, Integer, String

from usersapi.database.database import Base


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    # Primary key (assigned by the database); SQLite only autoincrements INTEGER keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    gender = Column(String, nullable=False)
    age = Column(Integer, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from usersapi.models.user import User
        return User(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            gender=self.gender,
            age=self.age,
        )

    @classmethod
    def from_create(cls, payload):
        """Create database model from a CreateUser payload (id left to the database)."""
        return cls(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            gender=payload.gender,
            age=payload.age,
        )
