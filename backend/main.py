from valuator.main import app

# To run this application (from the backend/ directory):
# uvicorn main:app --reload
