"""
LUMA Learning Platform
Static learning content.

Course catalog, personal certifications, learning progress, recommendations,
the organization certification tracker and roadmap tracks are fixed
datasets. Services copy what they return, so these structures are never
mutated at runtime.
"""

# ── Course catalog ───────────────────────────────────────────────────────────

CATEGORIES = [
    "All", "Cloud Computing", "Leadership", "Data Science",
    "Security", "Web Development", "Project Management",
]
PROVIDERS = ["All", "Internal", "Udemy", "Coursera", "LinkedIn Learning"]

COURSES = [
    {
        "id": "1",
        "title": "AWS Solutions Architect Certification",
        "description": "Design resilient, cost-optimised architectures on AWS and prepare for the Associate exam.",
        "thumbnail": "https://images.unsplash.com/photo-1451187580459-43490279c0fa?w=400",
        "duration": "40 hours",
        "level": "Intermediate",
        "category": "Cloud Computing",
        "provider": "Udemy",
        "is_external": True,
        "reimbursement_eligible": True,
        "price": 199.99,
        "rating": 4.8,
        "enrolled_count": 1250,
    },
    {
        "id": "2",
        "title": "Leadership & Management Essentials",
        "description": "Core skills for new team leads: feedback, delegation and running effective one-on-ones.",
        "thumbnail": "https://images.unsplash.com/photo-1552664730-d307ca884978?w=400",
        "duration": "12 hours",
        "level": "Beginner",
        "category": "Leadership",
        "provider": "Internal",
        "is_external": False,
        "reimbursement_eligible": False,
        "price": None,
        "rating": 4.6,
        "enrolled_count": 840,
    },
    {
        "id": "3",
        "title": "Machine Learning Specialization",
        "description": "Supervised and unsupervised learning, model evaluation and practical data science workflows.",
        "thumbnail": "https://images.unsplash.com/photo-1555949963-aa79dcee981c?w=400",
        "duration": "60 hours",
        "level": "Advanced",
        "category": "Data Science",
        "provider": "Coursera",
        "is_external": True,
        "reimbursement_eligible": True,
        "price": 49.0,
        "rating": 4.9,
        "enrolled_count": 2100,
    },
    {
        "id": "4",
        "title": "Secure Coding Practices",
        "description": "Recognise and prevent the most common application security flaws in day-to-day code.",
        "thumbnail": "https://images.unsplash.com/photo-1550751827-4bd374c3f58b?w=400",
        "duration": "8 hours",
        "level": "Intermediate",
        "category": "Security",
        "provider": "Internal",
        "is_external": False,
        "reimbursement_eligible": False,
        "price": None,
        "rating": 4.5,
        "enrolled_count": 1530,
    },
    {
        "id": "5",
        "title": "Modern React & TypeScript",
        "description": "Build maintainable front-end applications with hooks, typed props and component testing.",
        "thumbnail": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=400",
        "duration": "28 hours",
        "level": "Intermediate",
        "category": "Web Development",
        "provider": "Udemy",
        "is_external": True,
        "reimbursement_eligible": True,
        "price": 89.99,
        "rating": 4.7,
        "enrolled_count": 980,
    },
    {
        "id": "6",
        "title": "Agile Project Management",
        "description": "Scrum and Kanban fundamentals, sprint planning and stakeholder communication.",
        "thumbnail": "https://images.unsplash.com/photo-1531403009284-440f080d1e12?w=400",
        "duration": "16 hours",
        "level": "Beginner",
        "category": "Project Management",
        "provider": "LinkedIn Learning",
        "is_external": True,
        "reimbursement_eligible": True,
        "price": 39.99,
        "rating": 4.4,
        "enrolled_count": 760,
    },
    {
        "id": "7",
        "title": "Data Engineering with Python",
        "description": "Pipelines, orchestration and warehouse modelling using Python and SQL.",
        "thumbnail": "https://images.unsplash.com/photo-1518186285589-2f7649de83e0?w=400",
        "duration": "24 hours",
        "level": "Intermediate",
        "category": "Data Science",
        "provider": "Internal",
        "is_external": False,
        "reimbursement_eligible": False,
        "price": None,
        "rating": 4.6,
        "enrolled_count": 640,
    },
    {
        "id": "8",
        "title": "Google Cloud Professional Data Engineer",
        "description": "Design data processing systems on GCP and prepare for the Professional certification.",
        "thumbnail": "https://images.unsplash.com/photo-1544197150-b99a580bb7a8?w=400",
        "duration": "35 hours",
        "level": "Advanced",
        "category": "Cloud Computing",
        "provider": "Coursera",
        "is_external": True,
        "reimbursement_eligible": True,
        "price": 149.0,
        "rating": 4.7,
        "enrolled_count": 530,
    },
]


# ── Current learner ──────────────────────────────────────────────────────────

CERTIFICATIONS = [
    {
        "id": "c1",
        "name": "AWS Solutions Architect - Associate",
        "provider": "Amazon Web Services",
        "date_earned": "2024-03-15",
        "expiry_date": "2027-03-15",
        "deadline": None,
        "status": "Active",
    },
    {
        "id": "c2",
        "name": "Project Management Professional (PMP)",
        "provider": "PMI",
        "date_earned": "2023-06-20",
        "expiry_date": "2026-06-20",
        "deadline": None,
        "status": "Active",
    },
    {
        "id": "c3",
        "name": "Google Cloud Professional Cloud Architect",
        "provider": "Google Cloud",
        "date_earned": None,
        "expiry_date": None,
        "deadline": "2025-09-30",
        "status": "In Progress",
    },
    {
        "id": "c4",
        "name": "Certified ScrumMaster",
        "provider": "Scrum Alliance",
        "date_earned": "2021-02-10",
        "expiry_date": "2023-02-10",
        "deadline": None,
        "status": "Expired",
    },
]

LEARNING_PROGRESS = [
    {"course_id": "2", "progress": 75, "started_at": "2024-10-01", "completed_at": None, "status": "In Progress"},
    {"course_id": "6", "progress": 45, "started_at": "2024-11-05", "completed_at": None, "status": "In Progress"},
    {"course_id": "4", "progress": 100, "started_at": "2024-06-10", "completed_at": "2024-07-02", "status": "Completed"},
    {"course_id": "7", "progress": 100, "started_at": "2024-04-15", "completed_at": "2024-05-30", "status": "Completed"},
]

AI_RECOMMENDATIONS = [
    {
        "course_id": "1",
        "reason": "Matches your team's cloud migration goals and is reimbursement eligible.",
        "match_score": 95,
    },
    {
        "course_id": "8",
        "reason": "Builds on your in-progress Google Cloud certification.",
        "match_score": 88,
    },
    {
        "course_id": "3",
        "reason": "Popular with analysts in your department this quarter.",
        "match_score": 82,
    },
]


# ── Organization certification tracker ───────────────────────────────────────

PROGRESS_STATUSES = ["Completed", "In Progress", "Pending Approval", "Not Started"]

ORG_CERTIFICATION_RECORDS = [
    {
        "id": "1", "employee_name": "Rajesh Kumar", "emp_code": "EMP001",
        "employee_role": "Senior Analyst", "certification_name": "AWS Solutions Architect",
        "team_manager": "Priya Sharma", "location": "Gurgaon", "progress": "Completed",
        "request_date": "2024-08-15", "approval_date": "2024-08-18", "completion_date": "2024-11-20",
        "department": "Data Engineering",
    },
    {
        "id": "2", "employee_name": "Anita Patel", "emp_code": "EMP002",
        "employee_role": "Business Analyst", "certification_name": "Tableau Desktop Specialist",
        "team_manager": "Vikram Singh", "location": "Pune", "progress": "In Progress",
        "request_date": "2024-09-10", "approval_date": "2024-09-12", "completion_date": None,
        "department": "Analytics",
    },
    {
        "id": "3", "employee_name": "Michael Chen", "emp_code": "EMP003",
        "employee_role": "Data Engineer", "certification_name": "Databricks Certified Associate",
        "team_manager": "Priya Sharma", "location": "San Francisco", "progress": "Pending Approval",
        "request_date": "2024-12-01", "approval_date": None, "completion_date": None,
        "department": "Data Engineering",
    },
    {
        "id": "4", "employee_name": "Sarah Johnson", "emp_code": "EMP004",
        "employee_role": "Programmer Analyst", "certification_name": "Azure Data Engineer",
        "team_manager": "Vikram Singh", "location": "Boston", "progress": "Completed",
        "request_date": "2024-07-20", "approval_date": "2024-07-22", "completion_date": "2024-10-15",
        "department": "Cloud Services",
    },
    {
        "id": "5", "employee_name": "Amit Verma", "emp_code": "EMP005",
        "employee_role": "Senior Analyst", "certification_name": "IQVIA Certified Professional",
        "team_manager": "Priya Sharma", "location": "Gurgaon", "progress": "In Progress",
        "request_date": "2024-10-05", "approval_date": "2024-10-08", "completion_date": None,
        "department": "Pharma Analytics",
    },
    {
        "id": "6", "employee_name": "Emily Davis", "emp_code": "EMP006",
        "employee_role": "Intern", "certification_name": "Python for Data Science",
        "team_manager": "Vikram Singh", "location": "Princeton", "progress": "Not Started",
        "request_date": "2024-11-15", "approval_date": "2024-11-18", "completion_date": None,
        "department": "Analytics",
    },
    {
        "id": "7", "employee_name": "Neha Gupta", "emp_code": "EMP007",
        "employee_role": "Business Analyst", "certification_name": "Power BI Data Analyst",
        "team_manager": "Priya Sharma", "location": "Gurgaon", "progress": "Completed",
        "request_date": "2024-06-10", "approval_date": "2024-06-12", "completion_date": "2024-09-25",
        "department": "Analytics",
    },
    {
        "id": "8", "employee_name": "James Wilson", "emp_code": "EMP008",
        "employee_role": "Data Engineer", "certification_name": "Snowflake SnowPro Core",
        "team_manager": "Vikram Singh", "location": "Chicago", "progress": "In Progress",
        "request_date": "2024-10-20", "approval_date": "2024-10-23", "completion_date": None,
        "department": "Data Engineering",
    },
    {
        "id": "9", "employee_name": "Pooja Reddy", "emp_code": "EMP009",
        "employee_role": "Senior Analyst", "certification_name": "SAS Certified Specialist",
        "team_manager": "Priya Sharma", "location": "Pune", "progress": "Pending Approval",
        "request_date": "2024-12-05", "approval_date": None, "completion_date": None,
        "department": "Pharma Analytics",
    },
    {
        "id": "10", "employee_name": "David Brown", "emp_code": "EMP010",
        "employee_role": "Programmer Analyst", "certification_name": "Google Cloud Professional",
        "team_manager": "Vikram Singh", "location": "San Francisco", "progress": "Completed",
        "request_date": "2024-05-15", "approval_date": "2024-05-18", "completion_date": "2024-08-30",
        "department": "Cloud Services",
    },
]

ORG_SEARCH_FIELDS = (
    "employee_name", "emp_code", "certification_name",
    "team_manager", "location", "department",
)


# ── Learning roadmaps ────────────────────────────────────────────────────────

def _checkpoints(*rows):
    return [
        {"id": str(i), "title": title, "description": desc, "duration": dur, "status": "upcoming"}
        for i, (title, desc, dur) in enumerate(rows, start=1)
    ]


ROADMAP_TRACKS = {
    "iqvia-dataset": {
        "id": "iqvia-dataset",
        "title": "IQVIA Dataset",
        "description": "Master IQVIA pharmaceutical data analysis and reporting",
        "total_duration": "40 hours",
        "checkpoints": _checkpoints(
            ("Introduction to IQVIA", "Overview of IQVIA data sources and structure", "4 hrs"),
            ("Data Dictionary Deep Dive", "Understanding key fields, codes, and classifications", "6 hrs"),
            ("Prescription Data Analysis", "Analyzing Rx data for market insights", "8 hrs"),
            ("Claims Data Processing", "Working with medical and pharmacy claims", "8 hrs"),
            ("Advanced Analytics & Reporting", "Building dashboards and automated reports", "10 hrs"),
            ("Final Assessment", "Capstone project and certification", "4 hrs"),
        ),
    },
    "data-engineering": {
        "id": "data-engineering",
        "title": "Data Engineering Fundamentals",
        "description": "Build scalable data pipelines and ETL processes",
        "total_duration": "50 hours",
        "checkpoints": _checkpoints(
            ("Data Architecture Basics", "Understanding data lakes, warehouses, and lakehouses", "6 hrs"),
            ("SQL Mastery", "Advanced SQL for data transformations", "8 hrs"),
            ("Python for Data Engineering", "Pandas, PySpark, and data manipulation", "10 hrs"),
            ("ETL Pipeline Design", "Building robust extraction, transformation, and loading pipelines", "10 hrs"),
            ("Cloud Data Platforms", "AWS, Azure, and GCP data services", "10 hrs"),
            ("Data Orchestration", "Airflow, Prefect, and workflow management", "6 hrs"),
        ),
    },
    "dqm-qc": {
        "id": "dqm-qc",
        "title": "DQM / QC Framework",
        "description": "Implement data quality management and quality control processes",
        "total_duration": "35 hours",
        "checkpoints": _checkpoints(
            ("DQM Fundamentals", "Data quality dimensions and metrics", "5 hrs"),
            ("Quality Rules Engine", "Designing and implementing validation rules", "7 hrs"),
            ("Anomaly Detection", "Statistical methods for identifying data issues", "6 hrs"),
            ("QC Automation", "Automating quality checks in pipelines", "8 hrs"),
            ("Reporting & Governance", "Building quality dashboards and documentation", "5 hrs"),
            ("Case Studies", "Real-world pharma data quality scenarios", "4 hrs"),
        ),
    },
}


# ── Scripted assistant ───────────────────────────────────────────────────────

ASSISTANT_GREETING = (
    "Hi! I'm your AI learning assistant. I can help you discover courses, track your "
    "progress, and recommend learning paths based on your role and goals. "
    "How can I help you today?"
)

SUGGESTED_QUESTIONS = [
    "What should I learn next?",
    "Which certifications help my role?",
    "Show my learning progress",
    "Recommend AWS courses",
]

ASSISTANT_RESPONSES = {
    "What should I learn next?": (
        "Based on your role as an Engineering Manager and your current certifications, "
        "I recommend focusing on **AWS Solutions Architect** certification. It aligns with "
        "your team's cloud initiatives and would strengthen your technical leadership. "
        "You're already 75% through the Leadership & Management Essentials course - "
        "finish that first, then start the AWS track!"
    ),
    "Which certifications help my role?": (
        "For your Engineering Manager role, these certifications would be most valuable:\n\n"
        "1. **AWS Solutions Architect** - Cloud architecture skills\n"
        "2. **PMP Certification** - Already completed! ✓\n"
        "3. **Google Cloud Professional** - In progress, keep going!\n"
        "4. **Scrum Master** - Team methodology alignment\n\n"
        "Would you like me to create a learning roadmap for any of these?"
    ),
    "Show my learning progress": (
        "Here's your learning snapshot:\n\n"
        "📚 **Courses in Progress:** 2\n"
        "- Leadership Essentials: 75% complete\n"
        "- Agile Project Management: 45% complete\n\n"
        "🏆 **Active Certifications:** 2\n"
        "- AWS Solutions Architect (expires 2027)\n"
        "- PMP (expires 2026)\n\n"
        "⏰ **Estimated time to complete current courses:** 12 hours\n\n"
        "Would you like me to set up reminders to help you finish these courses?"
    ),
    "Recommend AWS courses": (
        "Great choice! Here are the top AWS courses for you:\n\n"
        "1. **AWS Solutions Architect Certification** (40h) - ⭐ 4.8\n"
        "   - Perfect for your cloud architecture goals\n"
        "   - Reimbursement eligible: $199.99\n\n"
        "2. **AWS DevOps Engineer** (35h) - ⭐ 4.7\n"
        "   - Complements your engineering background\n\n"
        "3. **AWS Security Specialty** (25h) - ⭐ 4.6\n"
        "   - Growing importance for team leads\n\n"
        "Want me to help you apply for any of these?"
    ),
}

ASSISTANT_FALLBACK = (
    "I'd be happy to help with that! Let me analyze your learning profile and get back "
    "to you with personalized recommendations. Is there anything specific about your "
    "learning goals you'd like to share?"
)
