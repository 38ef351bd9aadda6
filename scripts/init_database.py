import sys
import os
# Add project root to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
from sqlalchemy import create_engine
from db.database import init_db
from constants import DATABASE_URL

def main():
    parser = argparse.ArgumentParser(description='Create the event tables')
    parser.add_argument('--database-url', default=DATABASE_URL,
                      help='Database to initialise (default: DATABASE_URL)')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    init_db(bind=create_engine(args.database_url))

if __name__ == '__main__':
    main()
