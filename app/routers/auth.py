from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.schemas.response import envelope
from app.schemas.user import UserCreate, UserLogin, UserOut, FcmTokenUpdate
from app.models.user import User
from app.utils.auth import hash_password, verify_password, create_token, get_current_user
from app.database import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(user: UserCreate, db: Session = Depends(get_db)):
    exists = db.query(User).filter(User.email == user.email).first()
    if exists:
        raise HTTPException(status_code=400, detail="Email already exists")

    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise HTTPException(status_code=400, detail=str(e))

    new_user = User(name=user.name, email=user.email, password=hashed, fcm_token=user.fcm_token)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    data = UserOut.model_validate(new_user).model_dump(by_alias=True)
    return envelope(201, data, "User registered successfully")


@router.post("/login")
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user.email).first()
    if not db_user or not verify_password(user.password, db_user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_token({"sub": db_user.email})
    return {"token": token}


@router.patch("/fcm-token")
def update_fcm_token(
    body: FcmTokenUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    current.fcm_token = body.fcm_token
    db.commit()
    return envelope(200, None, "Device token updated")
