"""
Test catalogue endpoints
Jobs link to these through test_id
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.core.exceptions import BusinessRuleViolation, NotFoundError
from app.models.test import Test
from app.schemas.test import TestCreate, TestResponse

router = APIRouter(prefix="/tests", tags=["Tests"])


@router.post("/", response_model=TestResponse, status_code=status.HTTP_201_CREATED)
def create_test(test_data: TestCreate, db: Session = Depends(get_db)):
    if db.query(Test).filter(Test.test_id == test_data.test_id).first():
        raise BusinessRuleViolation(f"Test with ID {test_data.test_id} already exists")

    test = Test(**test_data.model_dump())
    db.add(test)
    db.commit()
    db.refresh(test)
    return test


@router.get("/", response_model=List[TestResponse])
def list_tests(active_only: bool = False, db: Session = Depends(get_db)):
    query = db.query(Test)
    if active_only:
        query = query.filter(Test.test_status == 1)
    return query.order_by(Test.test_id).all()


@router.get("/{test_id}", response_model=TestResponse)
def get_test(test_id: int, db: Session = Depends(get_db)):
    test = db.query(Test).filter(Test.test_id == test_id).first()
    if not test:
        raise NotFoundError("Test not found")
    return test
