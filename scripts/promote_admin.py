"""Script to promote a profile to admin (or back to student)."""
import argparse
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from volunteer_hours.database import SessionLocal
from volunteer_hours.exceptions import HoursTrackingError
from volunteer_hours.models import UserRole
from volunteer_hours.records import SqlRecordStore


def set_role(profile_id: str, role: UserRole) -> bool:
    """
    Change a profile's role.
    
    Args:
        profile_id: ID of the profile
        role: New role
        
    Returns:
        True if the profile was updated
    """
    db = SessionLocal()
    try:
        store = SqlRecordStore(db)
        profile = store.update("profiles", {"id": profile_id}, {"role": role.value})
        print(f"Profile updated successfully!")
        print(f"Name: {profile['full_name']}")
        print(f"Role: {profile['role']}")
        return True
        
    except HoursTrackingError as e:
        print(f"Error updating profile: {e.message}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Promote a profile to admin")
    parser.add_argument("profile_id", help="ID of the profile to change")
    parser.add_argument("--demote", action="store_true", help="Reset the profile back to student")
    args = parser.parse_args()
    
    role = UserRole.STUDENT if args.demote else UserRole.ADMIN
    if not set_role(args.profile_id, role):
        sys.exit(1)
