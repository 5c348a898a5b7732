import pytest


SAMPLE_RESUME = """Priya Sharma
Pune, Maharashtra
priya.sharma@example.com

PROFESSIONAL EXPERIENCE
Senior Customer Success Manager
Freshworks Technologies
Jan 2020 - Present
• Owned a book of 40 enterprise accounts
Account Manager
Zoho Corp
Mar 2016 - Dec 2019
• Grew renewals by 20%

EDUCATION
MBA, Symbiosis Institute of Business Management
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME
