from typing import Optional

from psycopg.rows import class_row

from soundgood import db
from soundgood.models import Student


class StudentRepository:
    """
    Repository for student data access.
    Encapsulates all SQL and queries for the student table.
    """

    def get_by_id(self, student_id: int, exclusive: bool = False) -> Optional[Student]:
        """
        Get student by ID, without rentals.

        Locking the student row serializes rentals for the same student,
        including the first one, when there are no agreement rows to lock yet.
        """
        query = "SELECT student_id, name FROM student WHERE student_id = %s"
        if exclusive:
            query += " FOR UPDATE"
        return db.fetch_one(query, (student_id,), row_factory=class_row(Student))

    def create(self, name: str) -> Student:
        """Create a new student."""
        return db.fetch_one(
            "INSERT INTO student (name) VALUES (%s) RETURNING student_id, name",
            (name,),
            row_factory=class_row(Student),
        )
