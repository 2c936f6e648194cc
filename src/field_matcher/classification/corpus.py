"""
Bundled training corpus: real captions from Indian college, placement and
scholarship forms, grouped by the FieldId they refer to.

Maintenance rules:
- Every FieldId here must have an entry in the profile resolver lookup table.
- Keep classes between 4 and 10 labels. The class prior is the label count,
  so a much larger class swallows the single-word labels of small ones.
- A word shared across classes ("name", "year", "percentage") must be
  outweighed by a word repeated inside the owning class.
- Group order is the classifier tie-break order.
"""

from typing import Dict, List

from ..models.training import TrainingExample
from ..version import CORPUS_VERSION


CORPUS_LABELS: Dict[str, List[str]] = {
    # ========================================================================
    # PERSONAL
    # ========================================================================
    "fullName": [
        "Full Name",
        "Name",
        "Fullname",
        "Complete Name",
        "Applicant Name",
        "Student Name",
        "Candidate Name",
        "Full Name as per Marksheet",
        "Name of Student",
        "Name of the Candidate",
    ],
    "firstName": [
        "First Name",
        "First Name*",
        "Firstname",
        "Fname",
        "Forename",
        "Applicant First Name",
        "Student First Name",
        "Candidate First Name",
    ],
    "middleName": [
        "Middle Name",
        "Middle Name*",
        "Middle Name of Student",
        "Student Middle Name",
        "Middlename",
        "Mname",
    ],
    "lastName": [
        "Last Name",
        "Last Name*",
        "Lastname",
        "Lname",
        "Surname",
        "Surname*",
        "Surname / Family Name",
        "Student Last Name",
    ],
    "gender": [
        "Gender",
        "Gender*",
        "Sex",
        "Select Gender",
        "Gender (Male/Female)",
        "Gender [Female, Male]",
    ],
    "dateOfBirth": [
        "Date of Birth",
        "Date of Birth*",
        "DOB",
        "DOB*",
        "Birthdate",
        "Birth Date",
        "Birthday",
        "Date of Birth (DD/MM/YYYY)",
    ],
    # ========================================================================
    # CONTACT & IDENTITY
    # ========================================================================
    "email": [
        "Email",
        "Email Address",
        "Email ID",
        "E-mail",
        "E Mail",
        "Personal Email",
    ],
    "phone": [
        "Mobile Number",
        "Mobile Number - 10 digits only (Do NOT write +91 or 0)*",
        "Mobile No",
        "Phone Number",
        "Phone",
        "Contact Number",
        "Contact No",
        "Cell Phone",
        "Primary Contact Number",
        "Mobile Number (10 digits)",
    ],
    "whatsapp": [
        "WhatsApp Number",
        "WhatsApp",
        "Whats App Number",
        "WhatsApp No",
        "WhatsApp Contact",
    ],
    "aadhaarNumber": [
        "Aadhaar Number",
        "Aadhaar",
        "Aadhar Number",
        "Aadhar Card Number",
        "UID",
        "Aadhaar Card No",
    ],
    "pan": [
        "PAN",
        "PAN Number",
        "PAN Card Number",
        "Permanent Account Number",
        "PAN No",
    ],
    # ========================================================================
    # ADDRESS
    # ========================================================================
    "house": [
        "House Number",
        "House No",
        "Flat / House No",
        "Flat Number",
        "Building / Apartment",
    ],
    "street": [
        "Street",
        "Street Address",
        "Address Line 1",
        "Address",
        "Locality",
        "Area / Street",
    ],
    "city": [
        "City",
        "Town",
        "City / Town",
        "Current City",
        "Village / City",
    ],
    "state": [
        "State",
        "Province",
        "State / Province",
        "State of Residence",
    ],
    "pin": [
        "PIN Code",
        "Pincode",
        "PIN",
        "Zip Code",
        "Postal Code",
        "Zipcode",
        "Pin Code*",
    ],
    "country": [
        "Country",
        "Country of Residence",
        "Nationality / Country",
        "Home Country",
        "Country*",
    ],
    # ========================================================================
    # SCHOOL (10th / 12th / DIPLOMA)
    # ========================================================================
    "tenthPercentage": [
        "10th Percentage",
        "10th %",
        "SSC %",
        "SSC Marks",
        "10th Marks",
        "Tenth %",
        "10th Standard %",
        "10th CGPA",
    ],
    "tenthBoard": [
        "10th Board",
        "SSC Board",
        "Tenth Board",
        "Class 10 Board",
        "10th Board of Education",
    ],
    "tenthYear": [
        "10th Passing Year",
        "SSC Passing Year",
        "10th Year of Passing",
        "Tenth Passing Year",
        "Class 10 Year",
    ],
    "twelfthPercentage": [
        "12th Percentage",
        "12th %",
        "HSC %",
        "HSC Marks",
        "12th Marks",
        "Twelfth %",
        "Intermediate %",
        "Intermediate Marks",
        "12th CGPA",
    ],
    "twelfthBoard": [
        "12th Board",
        "HSC Board",
        "Twelfth Board",
        "Class 12 Board",
        "Intermediate Board",
    ],
    "twelfthYear": [
        "12th Passing Year",
        "HSC Passing Year",
        "12th Year of Passing",
        "Twelfth Passing Year",
        "Class 12 Year",
    ],
    "twelfthStream": [
        "12th Stream",
        "HSC Stream",
        "Stream",
        "Intermediate Stream",
        "Stream (Science/Commerce/Arts)",
    ],
    "diplomaPercentage": [
        "Diploma Percentage",
        "Diploma %",
        "Diploma Marks",
        "Polytechnic Diploma Percentage",
        "Diploma Aggregate",
    ],
    # ========================================================================
    # COLLEGE
    # ========================================================================
    "cgpa": [
        "CGPA",
        "GPA",
        "Current CGPA",
        "Overall CGPA",
        "Engineering CGPA",
        "BE-BTech %",
        "BTech CGPA",
        "SGPA / CGPA",
    ],
    "percentage": [
        "Percentage",
        "Percent",
        "Aggregate Percentage",
        "Overall Percentage",
        "Current Percentage",
        "Percentage Obtained",
        "Marks Percentage",
    ],
    "collegeName": [
        "College Name",
        "College",
        "Name of College",
        "Institution Name",
        "Institute",
        "Current College",
        "College / Institute Name",
        "Name of the Institution",
        "Engineering College",
        "Your College Name",
    ],
    "universityName": [
        "University",
        "University Name",
        "Name of University",
        "Affiliated University",
        "University Name*",
        "Your University Name",
    ],
    "course": [
        "Course",
        "Degree",
        "Degree Program",
        "Programme",
        "Course / Degree",
        "Course Enrolled",
        "Programme Enrolled",
    ],
    "branch": [
        "Branch",
        "Branch*",
        "Department",
        "Dept",
        "Specialization",
        "Engineering Branch",
        "Branch [CS, IT, Civil, Mech, E&TC]",
        "Discipline",
    ],
    "semester": [
        "Semester",
        "Sem",
        "Current Semester",
        "Present Semester",
        "Semester*",
        "Current Sem",
    ],
    "yearOfStudy": [
        "Year of Study",
        "Year of Study (1st/2nd/3rd/4th)",
        "Current Year of Study",
        "Academic Year",
        "Current Academic Year",
        "Current Year",
        "Which Year are you in",
    ],
    "yearOfGraduation": [
        "Year of Graduation",
        "Year of graduation*",
        "Graduation Year",
        "Year",
        "Passing Year",
        "Expected Graduation Year",
        "Batch",
        "Graduating Year",
        "Passout Year",
        "Year of Passing Out",
    ],
    "rollNumber": [
        "Roll Number",
        "Roll No",
        "Rollno",
        "Enrollment Number",
        "Enrolment No",
        "Class Roll Number",
    ],
    "prnNumber": [
        "PRN Number",
        "PRN",
        "University PRN Number",
        "PRN No",
        "Permanent Registration Number",
        "Registration Number",
    ],
    # ========================================================================
    # PLACEMENT
    # ========================================================================
    "role": [
        "Role Applied for",
        "Role",
        "Position",
        "Position Applied For",
        "Job Role",
        "Designation",
        "Post Applied For",
        "Profile Applied For",
    ],
    "technicalSkills": [
        "Technical Skills",
        "Skills",
        "Technical Achievements",
        "Projects",
        "Project",
        "Key Skills",
        "Achievements",
        "Projects and Achievements",
    ],
    "resumeLink": [
        "Resume",
        "Resume Link",
        "CV",
        "Upload Resume",
        "Resume / CV Link",
    ],
    # ========================================================================
    # SOCIAL
    # ========================================================================
    "linkedin": [
        "LinkedIn",
        "LinkedIn Profile",
        "LinkedIn URL",
        "Linked In",
        "LinkedIn Profile Link",
        "Linked In Profile",
    ],
    "github": [
        "GitHub",
        "GitHub Profile",
        "GitHub URL",
        "Git Hub",
        "GitHub Link",
    ],
    "portfolio": [
        "Portfolio",
        "Portfolio Website",
        "Portfolio URL",
        "Website",
        "Personal Website",
    ],
    "behance": [
        "Behance",
        "Behance Profile",
        "Behance URL",
        "Behance Portfolio",
    ],
    "instagram": [
        "Instagram",
        "Instagram Handle",
        "Instagram Profile",
        "Instagram ID",
        "Instagram Username",
    ],
    "twitter": [
        "Twitter",
        "Twitter Handle",
        "Twitter Profile",
        "X (Twitter) Handle",
    ],
    "telegram": [
        "Telegram",
        "Telegram Handle",
        "Telegram Username",
        "Telegram ID",
    ],
}


def load_training_corpus() -> List[TrainingExample]:
    """
    Flatten the bundled corpus into training examples, in group order.

    Returns:
        List of TrainingExample
    """
    return [
        TrainingExample(label=label, target=target)
        for target, labels in CORPUS_LABELS.items()
        for label in labels
    ]


__all__ = ["CORPUS_LABELS", "CORPUS_VERSION", "load_training_corpus"]
