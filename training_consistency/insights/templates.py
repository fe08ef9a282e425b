"""
Text Templates

Plain-text layouts for the terminal digest.
"""

DIGEST_TEMPLATE = """
  Training Consistency - {user_id}
  Period: {period_start} to {period_end}

  Score: {score_bar} {score}/100
{breakdown_section}
  Highlights:
{explanations_section}

  Daily sessions:
{chart_section}
"""

BREAKDOWN_TEMPLATE = """
  Breakdown:
    Frequency     {frequency:>5.1f} / 50
    Gaps          {gap:>5.1f} / 25
    Distribution  {distribution:>5.1f} / 15
    Intensity     {intensity:>5.1f} / 10"""

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
