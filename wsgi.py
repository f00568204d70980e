import os

from app import create_app

# Define the Flask application
app = create_app()


if __name__ == '__main__':
    app.run(debug=os.getenv("FLASK_DEBUG", "0") == "1")
