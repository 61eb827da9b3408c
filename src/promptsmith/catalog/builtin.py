"""Curated, read-only templates shipped with promptsmith."""

from typing import List

from ..core.types import (
    AIModel,
    ChainStep,
    ContextOptions,
    OutputFormat,
    Template,
    TemplateCategory,
    TemplateSection,
    VariableDefinition,
    VariableType,
)

LANGUAGES = ["TypeScript", "JavaScript", "Python", "Java", "Go", "Rust", "C++"]


CURATED_TEMPLATES: List[Template] = [
    # Coding
    Template(
        id="coding-code-review",
        name="Code Review",
        description="Get a thorough code review with best practices and improvements",
        category=TemplateCategory.CODING,
        template=(
            "Review the following {language} code for:\n"
            "- Code quality and readability\n"
            "- Potential bugs or edge cases\n"
            "- Performance optimizations\n"
            "- Best practices and design patterns\n"
            "\n"
            "{additionalFocus}\n"
            "\n"
            "Code to review:\n"
            "```{language}\n"
            "{code}\n"
            "```\n"
            "\n"
            "Provide specific, actionable feedback with code examples where helpful."
        ),
        variables=[
            VariableDefinition("language", "Programming Language", VariableType.SELECT, options=LANGUAGES),
            VariableDefinition("code", "Code to Review", VariableType.TEXTAREA,
                               placeholder="Paste your code here..."),
            VariableDefinition("additionalFocus", "Additional Focus Areas", VariableType.TEXT,
                               required=False, default_value="",
                               placeholder="e.g., security, accessibility..."),
        ],
        tags=["code", "review", "quality", "best practices"],
        context_options=ContextOptions(
            target_models=list(AIModel),
            output_formats=[OutputFormat.TEXT, OutputFormat.MARKDOWN],
            token_optimization=True,
        ),
    ),
    Template(
        id="coding-bug-fix",
        name="Bug Fix Helper",
        description="Debug and fix issues in your code",
        category=TemplateCategory.CODING,
        template=(
            "I have a bug in my {language} code.\n"
            "\n"
            "**Expected behavior:**\n"
            "{expectedBehavior}\n"
            "\n"
            "**Actual behavior:**\n"
            "{actualBehavior}\n"
            "\n"
            "**Error message (if any):**\n"
            "{errorMessage}\n"
            "\n"
            "**Code with the bug:**\n"
            "```{language}\n"
            "{code}\n"
            "```\n"
            "\n"
            "Please:\n"
            "1. Identify the root cause of the bug\n"
            "2. Explain why it's happening\n"
            "3. Provide a corrected version of the code\n"
            "4. Suggest how to prevent similar bugs in the future"
        ),
        variables=[
            VariableDefinition("language", "Programming Language", VariableType.SELECT, options=LANGUAGES),
            VariableDefinition("expectedBehavior", "Expected Behavior", placeholder="What should happen?"),
            VariableDefinition("actualBehavior", "Actual Behavior", placeholder="What actually happens?"),
            VariableDefinition("errorMessage", "Error Message", VariableType.TEXTAREA, required=False,
                               placeholder="Paste any error messages..."),
            VariableDefinition("code", "Code with Bug", VariableType.TEXTAREA,
                               placeholder="Paste the buggy code..."),
        ],
        tags=["debug", "fix", "error", "troubleshoot"],
    ),
    Template(
        id="coding-write-tests",
        name="Write Tests",
        description="Generate comprehensive unit tests for your code",
        category=TemplateCategory.CODING,
        template=(
            "Write {testFramework} unit tests for the following {language} code:\n"
            "\n"
            "```{language}\n"
            "{code}\n"
            "```\n"
            "\n"
            "Requirements:\n"
            "- Cover happy path scenarios\n"
            "- Include edge cases and error scenarios\n"
            "- Use descriptive test names\n"
            "- Aim for high coverage"
        ),
        variables=[
            VariableDefinition("language", "Programming Language", VariableType.SELECT,
                               options=["TypeScript", "JavaScript", "Python", "Java", "Go"]),
            VariableDefinition("testFramework", "Test Framework", VariableType.SELECT,
                               options=["Jest", "Vitest", "pytest", "JUnit", "Go testing"]),
            VariableDefinition("code", "Code to Test", VariableType.TEXTAREA),
        ],
        tags=["tests", "unit tests", "coverage", "TDD"],
    ),
    # Writing
    Template(
        id="writing-blog-outline",
        name="Blog Post Outline",
        description="Create a structured outline for your blog post",
        category=TemplateCategory.WRITING,
        template=(
            "Create a detailed blog post outline about: {topic}\n"
            "\n"
            "Target audience: {audience}\n"
            "Desired length: {length}\n"
            "Tone: {tone}\n"
            "\n"
            "Include:\n"
            "1. Compelling title options (3 variations)\n"
            "2. Hook/introduction approach\n"
            "3. Main sections with sub-points\n"
            "4. Key takeaways\n"
            "5. Call to action ideas"
        ),
        variables=[
            VariableDefinition("topic", "Blog Topic", placeholder="What is your blog post about?"),
            VariableDefinition("audience", "Target Audience",
                               placeholder="e.g., developers, marketers, beginners..."),
            VariableDefinition("length", "Desired Length", VariableType.SELECT,
                               options=["Short (500-800 words)", "Medium (1000-1500 words)",
                                        "Long-form (2000+ words)"]),
            VariableDefinition("tone", "Tone", VariableType.SELECT,
                               options=["Professional", "Casual", "Educational", "Humorous", "Inspirational"]),
        ],
        tags=["blog", "outline", "content", "structure"],
    ),
    Template(
        id="writing-research-article",
        name="Research to Article",
        description="Outline, draft, and polish an article in three chained steps",
        category=TemplateCategory.WRITING,
        template=(
            "Write a polished article about {topic} for {audience}."
        ),
        variables=[
            VariableDefinition("topic", "Article Topic"),
            VariableDefinition("audience", "Target Audience"),
            VariableDefinition("wordCount", "Word Count", VariableType.NUMBER,
                               required=False, default_value="800"),
        ],
        tags=["article", "chain", "research", "drafting"],
        chain_steps=[
            ChainStep(
                id="outline",
                order=1,
                name="Outline",
                prompt=(
                    "Create a concise outline for an article about {topic} "
                    "aimed at {audience}. List the main sections and the key "
                    "point of each."
                ),
                output_variable="outline",
                input_variables=[],
            ),
            ChainStep(
                id="draft",
                order=2,
                name="Draft",
                prompt=(
                    "Using this outline:\n{outline}\n\n"
                    "Write a first draft of roughly {wordCount} words for {audience}."
                ),
                output_variable="draft",
                input_variables=["outline"],
            ),
            ChainStep(
                id="polish",
                order=3,
                name="Polish",
                prompt=(
                    "Edit the following draft for clarity, flow, and accuracy. "
                    "Return only the final article.\n\n{draft}"
                ),
                output_variable="article",
                input_variables=["draft"],
            ),
        ],
    ),
    # Marketing
    Template(
        id="marketing-ad-copy",
        name="Ad Copy",
        description="Create compelling ad copy for any platform",
        category=TemplateCategory.MARKETING,
        template=(
            "Create {adType} ad copy for:\n"
            "\n"
            "**Product/Service:** {product}\n"
            "**Target Audience:** {audience}\n"
            "**Key Benefit:** {keyBenefit}\n"
            "**Call to Action:** {cta}\n"
            "\n"
            "Platform: {platform}\n"
            "\n"
            "Provide 3 variations with different angles/hooks."
        ),
        variables=[
            VariableDefinition("adType", "Ad Type", VariableType.SELECT,
                               options=["Awareness", "Consideration", "Conversion", "Retargeting"]),
            VariableDefinition("product", "Product/Service", placeholder="What are you advertising?"),
            VariableDefinition("audience", "Target Audience", placeholder="Who is this for?"),
            VariableDefinition("keyBenefit", "Key Benefit", placeholder="Main value proposition..."),
            VariableDefinition("cta", "Call to Action", placeholder="e.g., Sign up, Learn more..."),
            VariableDefinition("platform", "Platform", VariableType.SELECT,
                               options=["Facebook/Instagram", "Google Ads", "LinkedIn", "Twitter/X", "TikTok"]),
        ],
        tags=["ads", "copy", "marketing", "conversion"],
    ),
    # Productivity
    Template(
        id="productivity-meeting-notes",
        name="Meeting Notes",
        description="Summarize and organize meeting discussions",
        category=TemplateCategory.PRODUCTIVITY,
        template="",
        variables=[
            VariableDefinition("rawNotes", "Raw Meeting Notes", VariableType.TEXTAREA,
                               placeholder="Paste your rough meeting notes..."),
            VariableDefinition("owners", "Action Item Owners", required=False),
        ],
        tags=["meeting", "notes", "organize", "summary"],
        sections=[
            TemplateSection(
                id="instruction",
                name="Instruction",
                content="Organize the following meeting notes into a structured summary:",
                order=1,
            ),
            TemplateSection(
                id="notes",
                name="Notes",
                content="Meeting raw notes:\n{rawNotes}",
                order=2,
            ),
            TemplateSection(
                id="owners",
                name="Owners",
                content="Assign action items to these people where possible: {owners}",
                is_optional=True,
                order=3,
            ),
            TemplateSection(
                id="format",
                name="Format",
                content=(
                    "Format as:\n"
                    "1. **Meeting Overview** (date, attendees if mentioned, purpose)\n"
                    "2. **Key Discussion Points**\n"
                    "3. **Decisions Made**\n"
                    "4. **Action Items** (with owners if mentioned)\n"
                    "5. **Follow-up Required**"
                ),
                order=4,
            ),
        ],
    ),
    # Creative
    Template(
        id="creative-story-prompt",
        name="Story Prompt",
        description="Generate creative story starters and ideas",
        category=TemplateCategory.CREATIVE,
        template=(
            "Generate a creative story prompt in the {genre} genre.\n"
            "\n"
            "**Setting:** {setting}\n"
            "**Main character type:** {character}\n"
            "**Mood/tone:** {mood}\n"
            "\n"
            "Include:\n"
            "1. Opening hook (first paragraph)\n"
            "2. Main conflict/challenge\n"
            "3. Key characters to introduce\n"
            "4. Central mystery or question\n"
            "5. 3 possible plot directions"
        ),
        variables=[
            VariableDefinition("genre", "Genre", VariableType.SELECT,
                               options=["Fantasy", "Sci-Fi", "Mystery", "Romance", "Horror", "Thriller"]),
            VariableDefinition("setting", "Setting", placeholder="Where/when does it take place?"),
            VariableDefinition("character", "Main Character Type",
                               placeholder="e.g., reluctant hero, detective..."),
            VariableDefinition("mood", "Mood/Tone", VariableType.SELECT,
                               options=["Dark", "Lighthearted", "Mysterious", "Epic", "Intimate"]),
        ],
        tags=["story", "creative writing", "prompt", "fiction"],
    ),
]
