from models.assignment import AdministrativeStatus, Assignment
from models.profile import Profile
from models.course import CourseId, CourseOption, CourseSelection, COURSE_CATALOGUE
from models.homework_data import HomeworkData

__all__ = [
    "AdministrativeStatus",
    "Assignment",
    "Profile",
    "CourseId",
    "CourseOption",
    "CourseSelection",
    "COURSE_CATALOGUE",
    "HomeworkData",
]
