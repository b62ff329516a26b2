"""
Reading service.
Tracks books and reading sessions; a day counts as "read" when it has any
session.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from lifetrack.constants import KEY_BOOKS, KEY_READING_SESSIONS
from lifetrack.exceptions import BookNotFoundException, ValidationException
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import Book, BookStatus, ReadingSession, ReadingSnapshot
from lifetrack.services.date_service import DateService
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.reading")


class ReadingService:
    """Service for books and reading sessions"""

    def __init__(self, store: DocumentStore):
        self.book_repo = CollectionRepository(store, KEY_BOOKS, Book)
        self.session_repo = CollectionRepository(store, KEY_READING_SESSIONS, ReadingSession)
        self.books: List[Book] = []
        self.sessions: List[ReadingSession] = []
        self.load_data()

    def load_data(self) -> None:
        self.books = self.book_repo.load_all()
        self.sessions = self.session_repo.load_all()

    # Book views

    @property
    def currently_reading(self) -> List[Book]:
        return [book for book in self.books if book.status == BookStatus.CURRENTLY_READING]

    @property
    def primary_book(self) -> Optional[Book]:
        reading = self.currently_reading
        return reading[0] if reading else None

    @property
    def finished_books(self) -> List[Book]:
        return [book for book in self.books if book.status == BookStatus.FINISHED]

    @property
    def want_to_read_books(self) -> List[Book]:
        return [book for book in self.books if book.status == BookStatus.WANT_TO_READ]

    def get_book(self, book_id: str) -> Book:
        for book in self.books:
            if book.id == book_id:
                return book
        raise BookNotFoundException(book_id)

    # Book management

    def add_book(self, book: Book) -> Book:
        with self.book_repo.lock:
            self.books.append(book)
            self.book_repo.save_all(self.books)
        return book

    def update_book(self, book: Book) -> Book:
        self.get_book(book.id)
        return self._replace(book.model_copy(update={"updated_at": datetime.now()}))

    def delete_book(self, book_id: str) -> None:
        """Delete a book together with its sessions"""
        self.get_book(book_id)
        with self.book_repo.lock:
            self.books = [book for book in self.books if book.id != book_id]
            self.book_repo.save_all(self.books)
        with self.session_repo.lock:
            self.sessions = [s for s in self.sessions if s.book_id != book_id]
            self.session_repo.save_all(self.sessions)

    def start_reading(self, book_id: str, now: Optional[datetime] = None) -> Book:
        now = now or datetime.now()
        book = self.get_book(book_id)
        return self._replace(book.model_copy(update={
            "status": BookStatus.CURRENTLY_READING,
            "start_date": now,
            "updated_at": now,
        }))

    def finish_reading(self, book_id: str, now: Optional[datetime] = None) -> Book:
        now = now or datetime.now()
        book = self.get_book(book_id)
        return self._replace(book.model_copy(update={
            "status": BookStatus.FINISHED,
            "finish_date": now,
            "current_page": book.total_pages,
            "updated_at": now,
        }))

    # Sessions

    def log_reading(
        self,
        book_id: str,
        pages_read: int,
        duration_minutes: Optional[int] = None,
        note: Optional[str] = None,
        on: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> ReadingSession:
        """
        Log a reading session and advance the book.

        The session covers pages current_page..current_page + pages_read.
        The book's current page is clamped to its length and the book is
        marked finished once the last page is reached.

        Args:
            book_id: ID of the book
            pages_read: Pages read in the session
            duration_minutes: Optional minutes spent
            note: Optional note
            on: Day of the session (defaults to today)
            now: Current time, used for updated_at/finish_date

        Returns:
            The new session

        Raises:
            ValidationException: If pages_read is not positive
        """
        if pages_read <= 0:
            raise ValidationException("pages_read", "Pages read must be positive")
        now = now or datetime.now()
        on = on or now.date()
        book = self.get_book(book_id)

        start_page = book.current_page
        end_page = start_page + pages_read
        session = ReadingSession(
            book_id=book_id,
            date=on,
            pages_read=pages_read,
            duration_minutes=duration_minutes,
            note=note,
            start_page=start_page,
            end_page=end_page
        )
        with self.session_repo.lock:
            self.sessions.append(session)
            self.session_repo.save_all(self.sessions)

        self._advance(book, end_page, now)
        return session

    def update_progress(self, book_id: str, current_page: int, now: Optional[datetime] = None) -> Book:
        """
        Jump a book to a page. Moving forward records a session for the
        pages gained; moving backward records nothing.
        """
        if current_page < 0:
            raise ValidationException("current_page", "Page cannot be negative")
        now = now or datetime.now()
        book = self.get_book(book_id)

        pages_read = current_page - book.current_page
        if pages_read > 0:
            session = ReadingSession(
                book_id=book_id,
                date=now.date(),
                pages_read=pages_read,
                start_page=book.current_page,
                end_page=current_page
            )
            with self.session_repo.lock:
                self.sessions.append(session)
                self.session_repo.save_all(self.sessions)

        return self._advance(book, current_page, now)

    def sessions_for(self, on: date) -> List[ReadingSession]:
        return [session for session in self.sessions if session.date == on]

    def sessions_for_book(self, book_id: str) -> List[ReadingSession]:
        sessions = [s for s in self.sessions if s.book_id == book_id]
        return sorted(sessions, key=lambda s: s.date, reverse=True)

    def total_pages_read(self, book_id: str) -> int:
        return sum(s.pages_read for s in self.sessions_for_book(book_id))

    # Statistics

    def pages_read(self, on: date) -> int:
        return sum(s.pages_read for s in self.sessions_for(on))

    def minutes_read(self, on: date) -> int:
        return sum(s.duration_minutes or 0 for s in self.sessions_for(on))

    def did_read(self, on: date) -> bool:
        return len(self.sessions_for(on)) > 0

    def reading_streak(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return DateService.consecutive_days((s.date for s in self.sessions), today)

    def books_finished_in_year(self, year: int) -> int:
        return sum(
            1 for book in self.finished_books
            if book.finish_date is not None and book.finish_date.year == year
        )

    def snapshot(self, on: date) -> ReadingSnapshot:
        return ReadingSnapshot(sessions=self.sessions_for(on))

    def _advance(self, book: Book, page: int, now: datetime) -> Book:
        updates = {"current_page": min(page, book.total_pages), "updated_at": now}
        if updates["current_page"] >= book.total_pages:
            updates["status"] = BookStatus.FINISHED
            updates["finish_date"] = now
            logger.info(f"Finished '{book.title}'")
        return self._replace(book.model_copy(update=updates))

    def _replace(self, updated: Book) -> Book:
        with self.book_repo.lock:
            self.books = [updated if book.id == updated.id else book for book in self.books]
            self.book_repo.save_all(self.books)
        return updated
