from soundgood.student.repository import StudentRepository

__all__ = ["StudentRepository"]
