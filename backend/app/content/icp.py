# app/content/icp.py
"""
Contenu éditorial du questionnaire ICP (Ideal Customer Profile).
Utilisé par le seed ; l'admin peut ensuite tout modifier via /admin.
"""

ICP_TITLE = "Ideal Customer Profile (ICP) Readiness"

ICP_DESCRIPTION = (
    "Ten questions to check whether your organisation knows who it sells to, "
    "why they buy, and whether every team pursues the same customers."
)

ICP_QUESTIONS = [
    "Do you have a documented Ideal Customer Profile (ICP): industry, company size, geography, etc.?",
    "Have you identified decision-makers vs influencers in the purchase process?",
    "Are you clear about the problems customers are trying to solve by using your products or services?",
    "Do you have different personas or messages for different types of buyers "
    "(technical, financial, operational, management)?",
    "Have you eliminated segments that waste your time. e.g., price-sensitive or non-serious leads?",
    "Do you track which types of customers generate repeat orders, referrals, and long-term profit, "
    "not just one-time revenue?",
    "Have you clearly listed what typically triggers a customer to actively start exploring solutions like "
    "(e.g., breakdowns, expansion, quality issues, audit non-compliance)?",
    "Are your marketing, sales, and service teams aligned in practice on who your ideal customer is "
    "and who is not worth pursuing?",
    "Do you regularly revisit and update your Ideal Customer Profile based on feedback from internal teams "
    "(sales, marketing, service) or changes in business context?",
    "When your Ideal Customer Profile is updated, is it formally documented and clearly communicated "
    "to all internal stakeholders, including leadership?",
]
