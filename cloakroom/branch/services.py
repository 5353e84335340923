# cloakroom/branch/services.py
from sqlalchemy.orm import Session
from cloakroom.branch.models import Branch

def get_branch(db: Session, branch_id: int) -> Branch | None:
    return db.get(Branch, branch_id)

def is_branch_active(db: Session, branch_id: int) -> bool:
    branch = get_branch(db, branch_id)
    return bool(branch and branch.active)
