"""Fixed reply texts and defaults shared across flowpilot."""

DEFAULT_HISTORY_LIMIT = 5

WELCOME_MESSAGE = (
    'Welcome! I\'m your workflow copilot. Ask me to "List workflows" or start '
    'one directly, e.g. "Start Incident Response".'
)
IDLE_MESSAGE = "I'll wait here. Type a workflow command whenever you're ready."
HELP_MESSAGE = (
    "I'm your workflow copilot. Ask me to list workflows, start a run, complete "
    "steps, capture notes, or export a summary. You can say things like "
    '"Start Incident Response" or "Complete the current step".'
)
NO_ACTIVE_RUN_MESSAGE = (
    "There isn't an active workflow run yet. Start one with commands like "
    '"Start Employee Onboarding" or ask for "List workflows" to explore.'
)
DETAILS_NOT_FOUND_MESSAGE = (
    'I couldn\'t match that workflow. Try "Show details for Incident Response" '
    'or ask me to "List workflows".'
)
START_NOT_FOUND_MESSAGE = (
    'I couldn\'t find that workflow. Ask for "List workflows" to see the '
    "available playbooks."
)
NOTE_SYNTAX_MESSAGE = 'To add a note, try "Add note: waiting on security review".'
FIRST_STEP_MESSAGE = "You're already at the first step of this workflow."

SUPERSEDED_NOTE = "Automatically closed when a new workflow started."
CANCELLED_NOTE = "Run cancelled before completion."
NO_NOTES_TEXT = "No notes were captured during this run."

IDLE_QUICK_ACTIONS = (
    "List workflows",
    "Start Employee Onboarding",
    "Start Incident Response",
    "Show details for Feature Launch",
)
NOTE_QUICK_ACTION = "Add note: Blocker identified with current step"
