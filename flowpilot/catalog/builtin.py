"""Playbooks shipped with flowpilot."""

from __future__ import annotations

from .models import StepDefinition, WorkflowDefinition

EMPLOYEE_ONBOARDING = WorkflowDefinition(
    id="employee-onboarding",
    name="Employee Onboarding",
    summary="Get a new hire productive in their first 30 days with zero access gaps.",
    metrics=(
        "Accounts ready before day one",
        "First commit or deliverable within 10 days",
        "30-day satisfaction score of 4/5 or higher",
    ),
    tags=("people", "hr"),
    aliases=("onboarding", "onboard", "new hire", "new starter"),
    checklist=(
        "Signed offer and background check on file",
        "Hiring manager has booked the first-week calendar",
        "Onboarding buddy identified",
    ),
    resources=(
        "People Ops onboarding handbook",
        "IT provisioning request form",
        "First-week plan template",
    ),
    steps=(
        StepDefinition(
            id="paperwork",
            title="Confirm offer paperwork",
            description="Verify the signed offer, tax forms, and background check clearance.",
            owner="People Ops",
            duration="1 day",
            outputs=("Signed offer", "Background check clearance"),
        ),
        StepDefinition(
            id="provision-access",
            title="Provision accounts and hardware",
            description="Create SSO, email, and tool accounts and ship the laptop.",
            owner="IT",
            duration="2 days",
            outputs=("SSO account", "Laptop tracking number"),
        ),
        StepDefinition(
            id="first-week-plan",
            title="Share first-week plan",
            description="Send the agenda, team intros, and a starter task to the new hire.",
            owner="Hiring manager",
            duration="Before day one",
        ),
        StepDefinition(
            id="buddy-intro",
            title="Introduce onboarding buddy",
            description="Pair the new hire with a buddy for questions and shadowing.",
            owner="Team lead",
        ),
        StepDefinition(
            id="thirty-day-check",
            title="Hold 30-day check-in",
            description="Review goals, collect feedback, and close open access requests.",
            owner="Hiring manager",
            duration="30 minutes",
            outputs=("Check-in notes",),
        ),
    ),
)

INCIDENT_RESPONSE = WorkflowDefinition(
    id="incident-response",
    name="Incident Response",
    summary="Coordinate detection, mitigation, and follow-up for customer-impacting incidents.",
    metrics=(
        "Time to acknowledge under 5 minutes",
        "Time to mitigate under 60 minutes",
        "Postmortem published within 5 business days",
    ),
    tags=("reliability", "on-call"),
    aliases=("incident", "outage", "sev1", "sev 1", "sev2", "sev 2", "pager"),
    checklist=(
        "On-call rotation is staffed",
        "Incident channel template is ready",
        "Customer status page credentials are available",
    ),
    resources=(
        "Severity matrix",
        "Incident commander runbook",
        "Postmortem template",
    ),
    steps=(
        StepDefinition(
            id="triage",
            title="Triage and declare severity",
            description="Confirm the impact, assign an incident commander, and open the incident channel.",
            owner="Incident commander",
            duration="15 minutes",
            outputs=("Severity level", "Incident channel"),
        ),
        StepDefinition(
            id="mitigate",
            title="Contain customer impact",
            description="Roll back, fail over, or rate-limit until customers are no longer affected.",
            owner="On-call engineer",
            duration="Up to 60 minutes",
            outputs=("Mitigation in place",),
        ),
        StepDefinition(
            id="communicate",
            title="Publish stakeholder update",
            description="Post an update to the status page and internal channels at a fixed cadence.",
            owner="Communications lead",
            duration="Every 30 minutes",
            outputs=("Status page update",),
        ),
        StepDefinition(
            id="verify-recovery",
            title="Verify recovery",
            description="Watch error rates and latency dashboards until they return to baseline.",
            owner="On-call engineer",
        ),
        StepDefinition(
            id="postmortem",
            title="Hold blameless postmortem",
            description="Document the timeline, root cause, and follow-up actions with owners.",
            owner="Incident commander",
            duration="5 business days",
            outputs=("Postmortem document", "Action items"),
        ),
    ),
)

FEATURE_LAUNCH = WorkflowDefinition(
    id="feature-launch",
    name="Feature Launch",
    summary="Take a feature from code freeze to full rollout with aligned go-to-market teams.",
    metrics=(
        "No P1 regressions in the first week",
        "Support and sales enabled before general availability",
        "Adoption target reached within 30 days",
    ),
    tags=("product", "go-to-market"),
    aliases=("release", "rollout", "go-live", "go live"),
    checklist=(
        "Feature flag created",
        "QA plan approved",
        "Launch messaging drafted",
    ),
    resources=(
        "Launch tiering guide",
        "Feature flag dashboard",
        "Enablement deck template",
    ),
    steps=(
        StepDefinition(
            id="scope-freeze",
            title="Freeze scope and success criteria",
            description="Lock the feature scope and agree on the adoption metrics to track.",
            owner="Product manager",
            duration="1 day",
            outputs=("Scope document",),
        ),
        StepDefinition(
            id="qa-signoff",
            title="Finish QA sign-off",
            description="Run the regression suite and exploratory testing on the release candidate.",
            owner="QA lead",
            duration="3 days",
            outputs=("QA report",),
        ),
        StepDefinition(
            id="enablement",
            title="Brief support and sales",
            description="Walk customer-facing teams through the feature, FAQ, and known limitations.",
            owner="Product marketing",
        ),
        StepDefinition(
            id="rollout",
            title="Ramp feature flag to 100%",
            description="Increase exposure in stages while watching error budgets and feedback.",
            owner="Engineering lead",
            duration="1 week",
            outputs=("Rollout log",),
        ),
        StepDefinition(
            id="adoption-review",
            title="Review adoption metrics",
            description="Compare usage against the success criteria and decide on follow-ups.",
            owner="Product analyst",
            duration="30 days after release",
        ),
    ),
)

QUARTERLY_ACCESS_REVIEW = WorkflowDefinition(
    id="quarterly-access-review",
    name="Quarterly Access Review",
    summary="Certify that every account still needs the access it holds.",
    metrics=(
        "100% of managers attest on time",
        "Stale access revoked within 48 hours",
    ),
    tags=("security", "compliance"),
    aliases=("access review", "access audit", "entitlement review"),
    checklist=(
        "Identity provider reports are available",
        "Manager roster is current",
    ),
    resources=(
        "Access review policy",
        "Audit evidence folder",
    ),
    steps=(
        StepDefinition(
            id="pull-entitlements",
            title="Pull entitlement reports",
            description="Collect group memberships and admin roles from every in-scope system.",
            owner="Security engineer",
            duration="1 day",
            outputs=("Entitlement spreadsheet",),
        ),
        StepDefinition(
            id="manager-attestation",
            title="Collect manager attestations",
            description="Ask each manager to keep or revoke every entitlement on their team.",
            owner="Security engineer",
            duration="1 week",
        ),
        StepDefinition(
            id="revoke-stale",
            title="Revoke stale access",
            description="Remove every entitlement marked for revocation and confirm removal.",
            owner="IT",
            duration="48 hours",
        ),
        StepDefinition(
            id="file-evidence",
            title="File audit evidence",
            description="Store the attestations and revocation tickets for the auditors.",
            owner="Compliance lead",
            outputs=("Evidence archive",),
        ),
    ),
)

BUILTIN_WORKFLOWS = (
    EMPLOYEE_ONBOARDING,
    INCIDENT_RESPONSE,
    FEATURE_LAUNCH,
    QUARTERLY_ACCESS_REVIEW,
)
