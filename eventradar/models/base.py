from sqlalchemy.orm import declarative_base

# Base model class
Base = declarative_base()
