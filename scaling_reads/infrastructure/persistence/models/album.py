"""Album and Song ORM models. Songs are owned by their album (cascade delete)."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scaling_reads.infrastructure.persistence.database import Base


class Album(Base):
    """Album entity. Table: album."""

    __tablename__ = "album"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False)

    songs: Mapped[list["Song"]] = relationship(
        back_populates="album",
        cascade="all, delete-orphan",
        order_by="Song.position",
    )


class Song(Base):
    """Song owned by an album. Table: song. position keeps the submitted order."""

    __tablename__ = "song"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    album_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("album.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    album: Mapped[Album] = relationship(back_populates="songs")
