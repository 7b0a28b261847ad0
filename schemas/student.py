# schemas/student.py
"""
Pydantic schemas for student registration and lookup.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class StudentCreate(BaseModel):
     """Schema for registering a student (issuer action)."""
     student_id: str = Field(..., min_length=1, max_length=100)
     name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., min_length=3, max_length=255)
     course: Optional[str] = Field(None, max_length=200)
     department: Optional[str] = Field(None, max_length=200)
     enrollment_year: Optional[int] = Field(None, ge=1900, le=2100)
     wallet_address: Optional[str] = Field(None, max_length=64)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "student_id": "STU2024001",
                    "name": "John Doe",
                    "email": "student@university.edu",
                    "course": "Computer Science",
                    "department": "Engineering",
                    "enrollment_year": 2024
               }
          }
     )


class StudentSelfRegister(BaseModel):
     """Schema for public student sign-up."""
     student_id: str = Field(..., min_length=1, max_length=100)
     name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., min_length=3, max_length=255)
     password: str = Field(..., min_length=6, max_length=72)
     course: Optional[str] = Field(None, max_length=200)
     department: Optional[str] = Field(None, max_length=200)
     enrollment_year: Optional[int] = Field(None, ge=1900, le=2100)


class StudentResponse(BaseModel):
     id: int
     student_id: str
     name: str
     email: str
     course: Optional[str] = None
     department: Optional[str] = None
     enrollment_year: Optional[int] = None
     wallet_address: Optional[str] = None
     institution_id: Optional[int] = None
     status: str
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class StudentListResponse(BaseModel):
     students: List[StudentResponse]
