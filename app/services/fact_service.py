"""
Fact Service - student/company records and the facts a decision needs.

StudentService / CompanyService are the thin record layer behind the CRUD
routes. FactGatherer sits on top of them and is what the eligibility
service talks to: it resolves ids (raising NotFoundError for unknown ones)
and counts placed students fresh on every call.

Anything with the same four FactGatherer methods can stand in for it
(tests use an in-memory one).
"""

import logging
from typing import List, Optional

from sqlalchemy import text

from app.core.errors import DuplicateRecordError, NotFoundError
from app.db.database import get_db_session, execute_raw_sql
from app.schemas.schemas import (
    Company, PlacementStats, Student, StudentCreate, StudentUpdate
)

logger = logging.getLogger(__name__)


# ============================================================
# HELPER: Convert SQL rows to schemas
# NUMERIC columns come back as Decimal (PostgreSQL) or float (SQLite)
# ============================================================

STUDENT_COLUMNS = (
    "student_id, full_name, cgpa, is_placed, current_salary, "
    "companies_applied, dream_offer, dream_company"
)

# StudentUpdate field -> column
STUDENT_FIELD_COLUMNS = {
    "name": "full_name",
    "cgpa": "cgpa",
    "is_placed": "is_placed",
    "current_salary": "current_salary",
    "companies_applied": "companies_applied",
    "dream_offer": "dream_offer",
    "dream_company": "dream_company"
}


def row_to_student(row: dict) -> Student:
    return Student(
        id=row["student_id"],
        name=row["full_name"],
        cgpa=float(row["cgpa"]),
        is_placed=bool(row["is_placed"]),
        current_salary=float(row["current_salary"]),
        companies_applied=int(row["companies_applied"]),
        dream_offer=float(row["dream_offer"]),
        dream_company=row["dream_company"] or ""
    )


def row_to_company(row: dict) -> Company:
    return Company(
        id=row["company_id"],
        name=row["company_name"],
        offered_salary=float(row["offered_salary"])
    )


# ============================================================
# STUDENTS
# ============================================================

class StudentService:
    """Student records. Ids are assigned sequentially (max id + 1)."""

    def list_all(self) -> List[Student]:
        """All students, id ascending."""
        rows = execute_raw_sql(f"SELECT {STUDENT_COLUMNS} FROM students ORDER BY student_id")
        return [row_to_student(r) for r in rows]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        rows = execute_raw_sql(
            f"SELECT {STUDENT_COLUMNS} FROM students WHERE student_id = :id",
            {"id": student_id}
        )
        return row_to_student(rows[0]) if rows else None

    def insert(self, data: StudentCreate, student_id: Optional[int] = None) -> Student:
        """
        Insert a student.

        Args:
            data: Validated student fields
            student_id: Explicit id (seeding); next free id when omitted

        Returns:
            The stored Student
        """
        with get_db_session() as db:
            if student_id is None:
                result = db.execute(text("SELECT COALESCE(MAX(student_id), 0) + 1 FROM students"))
                student_id = int(result.fetchone()[0])
            else:
                result = db.execute(
                    text("SELECT 1 FROM students WHERE student_id = :id"),
                    {"id": student_id}
                )
                if result.fetchone():
                    raise DuplicateRecordError("Student", student_id)

            db.execute(
                text(f"""
                    INSERT INTO students ({STUDENT_COLUMNS})
                    VALUES (:student_id, :full_name, :cgpa, :is_placed, :current_salary,
                            :companies_applied, :dream_offer, :dream_company)
                """),
                {
                    "student_id": student_id,
                    "full_name": data.name,
                    "cgpa": data.cgpa,
                    "is_placed": data.is_placed,
                    "current_salary": data.current_salary,
                    "companies_applied": data.companies_applied,
                    "dream_offer": data.dream_offer,
                    "dream_company": data.dream_company
                }
            )

        logger.info("Student %s created", student_id)
        return Student(id=student_id, **data.model_dump())

    def update(self, student_id: int, data: StudentUpdate) -> Student:
        """Update only the provided fields. Raises NotFoundError for unknown ids."""
        updates = []
        params = {"id": student_id}

        for field, value in data.model_dump(exclude_none=True).items():
            column = STUDENT_FIELD_COLUMNS[field]
            updates.append(f"{column} = :{column}")
            params[column] = value

        with get_db_session() as db:
            result = db.execute(text("SELECT 1 FROM students WHERE student_id = :id"), {"id": student_id})
            if not result.fetchone():
                raise NotFoundError("Student", student_id)

            if updates:
                db.execute(
                    text(f"UPDATE students SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE student_id = :id"),
                    params
                )

        return self.get_by_id(student_id)

    def count(self) -> int:
        rows = execute_raw_sql("SELECT COUNT(*) AS total FROM students")
        return int(rows[0]["total"])

    def placement_stats(self) -> PlacementStats:
        """Placed / total counts, computed by the database in one query."""
        rows = execute_raw_sql("""
            SELECT COUNT(*) AS total_count,
                   COALESCE(SUM(CASE WHEN is_placed THEN 1 ELSE 0 END), 0) AS placed_count
            FROM students
        """)
        return PlacementStats(
            placed_count=int(rows[0]["placed_count"]),
            total_count=int(rows[0]["total_count"])
        )


# ============================================================
# COMPANIES
# ============================================================

class CompanyService:
    """Company records. Ids are caller-chosen strings."""

    def list_all(self) -> List[Company]:
        rows = execute_raw_sql(
            "SELECT company_id, company_name, offered_salary FROM companies ORDER BY company_id"
        )
        return [row_to_company(r) for r in rows]

    def get_by_id(self, company_id: str) -> Optional[Company]:
        rows = execute_raw_sql(
            "SELECT company_id, company_name, offered_salary FROM companies WHERE company_id = :id",
            {"id": company_id}
        )
        return row_to_company(rows[0]) if rows else None

    def insert(self, company: Company) -> Company:
        with get_db_session() as db:
            result = db.execute(
                text("SELECT 1 FROM companies WHERE company_id = :id"),
                {"id": company.id}
            )
            if result.fetchone():
                raise DuplicateRecordError("Company", company.id)

            db.execute(
                text("""
                    INSERT INTO companies (company_id, company_name, offered_salary)
                    VALUES (:company_id, :company_name, :offered_salary)
                """),
                {
                    "company_id": company.id,
                    "company_name": company.name,
                    "offered_salary": company.offered_salary
                }
            )

        logger.info("Company %s created", company.id)
        return company

    def count(self) -> int:
        rows = execute_raw_sql("SELECT COUNT(*) AS total FROM companies")
        return int(rows[0]["total"])


# ============================================================
# FACT GATHERER
# ============================================================

class FactGatherer:
    """
    Read-only access to the facts a decision needs.

    get_student / get_company raise NotFoundError; there is no
    default or partial fact.
    """

    def __init__(
        self,
        student_service: Optional[StudentService] = None,
        company_service: Optional[CompanyService] = None
    ):
        self.student_service = student_service or StudentService()
        self.company_service = company_service or CompanyService()

    def get_student(self, student_id: int) -> Student:
        student = self.student_service.get_by_id(student_id)
        if student is None:
            raise NotFoundError("Student", student_id)
        return student

    def get_company(self, company_id: str) -> Company:
        company = self.company_service.get_by_id(company_id)
        if company is None:
            raise NotFoundError("Company", company_id)
        return company

    def placement_stats(self) -> PlacementStats:
        return self.student_service.placement_stats()

    def list_students(self) -> List[Student]:
        return self.student_service.list_all()


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_student_service() -> StudentService:
    """Get student service instance."""
    return StudentService()


def get_company_service() -> CompanyService:
    """Get company service instance."""
    return CompanyService()
