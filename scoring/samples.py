"""Sample resumes that can be loaded into the editor."""

ENGINEERING_RESUME = """John Carter
Senior Frontend Engineer
Seattle, WA • john.carter@email.com • 555-101-2020

Summary
Frontend engineer focused on inclusive products and accessible design systems. Partner to product and research with a track record of shipping features that lift conversion and reduce friction for under-represented users.

Experience
Senior Frontend Engineer — Finch • 2021 - Present
- Led migration from Create React App to Vite, cutting build times by 68% and Lighthouse regressions by 40%.
- Built a bias-auditing UI for candidate review that surfaced under-represented pipelines; increased pass-through rates by 18%.
- Coached 4 engineers on TypeScript, testing, and performance profiling; introduced story-driven visual tests.

Product Engineer — Lumen Labs • 2018 - 2021
- Shipped multi-tenant design system components used by 7 teams; reduced UI defects by 32%.
- Partnered with recruiting to prototype a fair-screening flow; added semantic keyword matching and reduced false negatives by 22%.
- Implemented accessibility sweeps with axe-core and keyboard traps; passed WCAG 2.1 AA audits.

Education
University of Washington — B.S. Computer Science, 2018

Skills
React, TypeScript, Node.js, Vite, Accessibility, Design Systems, GraphQL, Storybook, Data Visualization
"""

SHORT_RESUME = """Kenya Lewis
Product Designer
Austin, TX • kenya.lewis@email.com • 555-555-3333

Experience
Product Designer — River • 2022 - Present
- Redesigned onboarding in 6 weeks; lifted activation by 14%.
- Shipped responsive component library in Figma + React handoff.

Education
Parsons School of Design — BFA Design & Technology

Skills
UX Research, Prototyping, Figma, Inclusive Writing, Accessibility
"""

SAMPLES = {
    'engineering': ENGINEERING_RESUME,
    'short': SHORT_RESUME,
}
