# /autoblogger/services/prompt_library.py

"""
This file is the central library for all prompts sent to the text-generation
providers. Treating prompts as code and centralizing them here keeps the
provider adapters free of copy.
"""

TITLE_PROMPT = (
    "Write a blog articles title from the slug '{slug}'. Return only one title. "
    "If it contains anything else then one single title it is useless."
)

# --- Multi-turn article conversation ---
# The first two turns are a worked example that steers the formatting: markdown,
# inline relative links that use slugs as targets.

ARTICLE_INSTRUCTION_TURN = (
    "You are a blog author. Create an example blog post to show how links should be used "
    "in a blog post about 'More Thoughts On AI'. Format the blog posts using markdown. "
    "Add inline links of important parts by using slugs as a relative URL without protocol, "
    "host or domain part."
)

ARTICLE_EXAMPLE_TURN = """Artificial Intelligence (AI) has been a hot topic in recent years, as advances in technology have allowed for greater and more widespread implementation of these systems. While [AI offers many benefits to society](ai-offers-many-benefits-to-society), including increased efficiency and accuracy in various fields ranging from healthcare to finance, there are also concerns about [its potential negative consequences](potential-negative-consequences-of-ai).

One of the major concerns about AI is its potential to displace human workers in certain industries. As AI becomes more advanced, it is likely that it will be able to perform many tasks that are currently done by human workers more efficiently and accurately. While this could lead to lower costs and increased productivity for businesses, it may also lead to job loss and economic disruption for those who are displaced."""

ARTICLE_PROMPT = (
    "Write a blog entry about the topic '{title}'. Format the blog posts using markdown. "
    "Add at least 5 inline links of important parts in the text (not at the end) by using slugs "
    "as a relative URL without protocol, host or domain part (no https://example.com). "
    "Do not repeat the title in the article. If you use the title in the article it is useless."
)
