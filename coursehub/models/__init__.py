from .course import Category, Course, CourseInsert, CourseLevel, CourseWithDisplayInfo
from .enrollment import DashboardStats, EnrolledCourse, Enrollment
from .profile import AuthSession, Profile

__all__ = [
    'Category',
    'Course',
    'CourseInsert',
    'CourseLevel',
    'CourseWithDisplayInfo',
    'DashboardStats',
    'EnrolledCourse',
    'Enrollment',
    'AuthSession',
    'Profile',
]
