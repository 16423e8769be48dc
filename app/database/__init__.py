from app.database.database import engine, session_maker, get_session, init_db
