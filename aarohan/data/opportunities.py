"""
Built-in internship catalog used when the stored catalog is empty or unreachable
"""
from typing import List

from ..models.opportunity import Opportunity


SAMPLE_OPPORTUNITIES: List[Opportunity] = [
    Opportunity(
        id="sample-1",
        title="Digital Marketing Assistant",
        company="TechStart India",
        description="Help create social media content and support digital marketing initiatives through various online channels.",
        location="Mumbai, Maharashtra",
        duration_months=6,
        stipend=8000,
        skills_required=["social media marketing", "communication", "content creation", "SEO basics"],
        category="marketing",
        is_remote=False,
        difficulty_level="beginner",
        qualifications_accepted=["High School", "Undergraduate"],
        languages_supported=["English", "Hindi"]
    ),
    Opportunity(
        id="sample-2",
        title="Customer Service Representative",
        company="Support Solutions",
        description="Handle customer inquiries and provide excellent service via phone and email. Resolve issues and maintain customer satisfaction.",
        location="Delhi, Delhi",
        duration_months=8,
        stipend=7500,
        skills_required=["customer service", "patience", "computer basics", "problem-solving"],
        category="operations",
        is_remote=False,
        difficulty_level="beginner",
        qualifications_accepted=["High School", "Undergraduate"],
        languages_supported=["English", "Hindi"]
    ),
    Opportunity(
        id="sample-3",
        title="Data Entry Specialist",
        company="Digital Records",
        description="Accurately input and maintain data in digital systems, ensuring data integrity and timely processing.",
        location="Chennai, Tamil Nadu",
        duration_months=6,
        stipend=6000,
        skills_required=["typing", "attention to detail", "computer skills", "data management"],
        category="operations",
        is_remote=True,
        difficulty_level="beginner",
        qualifications_accepted=["High School"],
        languages_supported=["English", "Tamil"]
    ),
    Opportunity(
        id="sample-4",
        title="Content Writing Intern",
        company="WordFlow Agency",
        description="Assist in writing articles, blog posts, and website content for various clients.",
        location="Bengaluru, Karnataka",
        duration_months=4,
        stipend=9000,
        skills_required=["writing", "grammar", "research", "creativity"],
        category="content",
        is_remote=True,
        difficulty_level="intermediate",
        qualifications_accepted=["Undergraduate", "Postgraduate"],
        languages_supported=["English"]
    ),
    Opportunity(
        id="sample-5",
        title="Junior Web Developer",
        company="CodeCraft Studios",
        description="Work with senior developers to build and maintain web applications using modern frameworks.",
        location="Hyderabad, Telangana",
        duration_months=9,
        stipend=12000,
        skills_required=["HTML", "CSS", "JavaScript", "React"],
        category="technology",
        is_remote=False,
        difficulty_level="intermediate",
        qualifications_accepted=["Undergraduate", "Postgraduate"],
        languages_supported=["English"]
    ),
]
