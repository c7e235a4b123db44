# chronolens/generation/prompts.py
from langchain_core.prompts import ChatPromptTemplate

_SYSTEM = (
    "You are a historian specializing in {category}. "
    "Every event must have a title, an ISO date (YYYY-MM-DD) from a past year, "
    "a 50-100 word description, the category {category}, and a source URL to a "
    "reputable website (Wikipedia, Encyclopedia Britannica, History.com or an academic institution)."
)

# 1. Events on the exact same month and day
HISTORICAL_EVENTS_TODAY_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """Today's date is {today}.
List significant historical events related to {category} that happened on the same month and day as {date} in previous years.
Only include events whose month and day match {date} exactly."""),
])

# 2. Events during the current calendar week
HISTORICAL_EVENTS_WEEK_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """Today's date is {today}.
List significant historical events related to {category} that happened during this same calendar week (same days and month) in previous years."""),
])
