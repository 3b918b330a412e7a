import sys
import os

# Add your project directory to the sys.path
project_home = '/home/YOUR_USERNAME/small-batch-costing'
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Set the working directory
os.chdir(project_home)
os.environ.setdefault('FLASK_ENV', 'production')

# Import the Flask app and make sure its tables exist
from app import app as application, init_db

init_db(application)
