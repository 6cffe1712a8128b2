from .database import Base, engine, SessionLocal, get_db, redis_client, get_redis_client
