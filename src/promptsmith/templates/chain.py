"""
Chain executor for multi-step prompt composition.

Each step renders its own sub-template against a shared variable context
and stores the executor's output back into that context, so later steps
can build on earlier ones. Steps run strictly one after another in
``order``; the first failure stops the chain and the results gathered so
far are returned.
"""

import asyncio
import inspect
import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Union,
)

from ..core.exceptions import ChainError
from ..core.types import ChainStep, ChainResult, ChainValidation, StepResult
from .variables import render_template

logger = logging.getLogger(__name__)

# Turns a rendered prompt into generated text. Sync callables are accepted too.
PromptExecutor = Callable[[str], Union[Awaitable[str], str]]

# Optional rewrite applied to each step prompt before it is executed
PromptTransform = Callable[[str], str]

DEFAULT_CHAIN_ERROR = "Chain execution failed"


def _sorted_steps(steps: Iterable[ChainStep]) -> List[ChainStep]:
    return sorted(steps, key=lambda step: step.order)


def validate_chain(
    steps: Iterable[ChainStep],
    initial_variables: Iterable[str] = ()
) -> ChainValidation:
    """
    Validate that every step's inputs are produced by an earlier step.

    Steps are checked in ``order``, not list position. An input is
    satisfied by the output variable of a step with a strictly smaller
    order, or by a name in initial_variables. Validation is advisory:
    execute_chain does not call it unless asked to.

    Args:
        steps: Chain steps to validate
        initial_variables: Names supplied by the caller's initial context

    Returns:
        ChainValidation with one error per missing input
    """
    errors: List[str] = []
    defined: Set[str] = set(initial_variables)

    sorted_steps = _sorted_steps(steps)
    index = 0
    while index < len(sorted_steps):
        # Steps sharing an order cannot feed each other
        order = sorted_steps[index].order
        group = []
        while index < len(sorted_steps) and sorted_steps[index].order == order:
            group.append(sorted_steps[index])
            index += 1

        for step in group:
            for input_var in step.input_variables:
                if input_var not in defined:
                    errors.append(
                        f'Step "{step.name}": Input variable "{input_var}" '
                        f'is not defined by any previous step'
                    )

        for step in group:
            if step.output_variable:
                defined.add(step.output_variable)

    return ChainValidation(is_valid=not errors, errors=errors)


def build_step_prompt(step: ChainStep, context: Mapping[str, Any]) -> str:
    """Render a step's prompt against the current context (partial render)."""
    return render_template(step.prompt, context)


async def execute_step(
    step: ChainStep,
    context: Mapping[str, Any],
    executor: PromptExecutor,
    transform: Optional[PromptTransform] = None
) -> StepResult:
    """
    Execute a single chain step.

    Args:
        step: Chain step to execute
        context: Current variable context
        executor: Callable that turns a prompt into generated text
        transform: Optional rewrite applied to the prompt before execution

    Returns:
        StepResult holding the exact prompt sent and the output received

    Raises:
        ChainError: If the executor does not return a string
    """
    prompt = build_step_prompt(step, context)
    if transform is not None:
        prompt = transform(prompt)

    output = executor(prompt)
    if inspect.isawaitable(output):
        output = await output

    if not isinstance(output, str):
        raise ChainError(
            f"Executor must return str, got {type(output).__name__}",
            step=step.name
        )

    return StepResult(
        step_id=step.id,
        step_name=step.name,
        prompt=prompt,
        output=output,
        output_variable=step.output_variable,
    )


async def execute_chain(
    steps: Iterable[ChainStep],
    initial_context: Optional[Mapping[str, Any]],
    executor: PromptExecutor,
    transform: Optional[PromptTransform] = None,
    enforce_validation: bool = False,
    final_transform: Optional[PromptTransform] = None
) -> ChainResult:
    """
    Execute a full chain of prompts.

    The caller's initial_context is copied, never mutated. Each step's
    output is written to the context under its output_variable before
    the next step starts. If a step raises, execution stops and the
    result reports the failure along with every step completed so far.

    Args:
        steps: Chain steps, in any list order
        initial_context: Initial variable values
        executor: Callable that turns a prompt into generated text
        transform: Optional rewrite applied to every step prompt
        enforce_validation: Refuse to run a chain with unmet dependencies
        final_transform: Rewrite used instead of transform for the steps
            sharing the highest order

    Returns:
        ChainResult
    """
    context: Dict[str, Any] = dict(initial_context or {})
    results: List[StepResult] = []
    sorted_steps = _sorted_steps(steps)
    final_order = sorted_steps[-1].order if sorted_steps else None

    if enforce_validation:
        validation = validate_chain(sorted_steps, initial_variables=context.keys())
        if not validation.is_valid:
            logger.warning("Chain validation failed: %s", "; ".join(validation.errors))
            return ChainResult(
                success=False,
                steps=results,
                final_output="",
                context=context,
                error="; ".join(validation.errors),
            )

    try:
        for step in sorted_steps:
            logger.debug("Executing chain step %s (order %d)", step.name, step.order)
            step_transform = transform
            if final_transform is not None and step.order == final_order:
                step_transform = final_transform
            result = await execute_step(step, context, executor, step_transform)
            results.append(result)

            # Add output to context for the next step
            if step.output_variable:
                context[step.output_variable] = result.output

    except Exception as e:
        error = str(e) or DEFAULT_CHAIN_ERROR
        logger.warning(
            "Chain stopped after %d of %d steps: %s",
            len(results), len(sorted_steps), error
        )
        return ChainResult(
            success=False,
            steps=results,
            final_output="",
            context=context,
            error=error,
        )

    return ChainResult(
        success=True,
        steps=results,
        final_output=results[-1].output if results else "",
        context=context,
    )


def execute_chain_sync(
    steps: Iterable[ChainStep],
    initial_context: Optional[Mapping[str, Any]],
    executor: PromptExecutor,
    transform: Optional[PromptTransform] = None,
    enforce_validation: bool = False,
    final_transform: Optional[PromptTransform] = None
) -> ChainResult:
    """Synchronous version of execute_chain."""
    return asyncio.run(execute_chain(
        steps, initial_context, executor, transform, enforce_validation,
        final_transform
    ))


def create_simple_chain(prompts: List[str]) -> List[ChainStep]:
    """
    Create a linear chain from a list of prompts.

    Step i (1-based) stores its output as "step{i}Output" and, except for
    the first step, declares "step{i-1}Output" as its input.

    Args:
        prompts: Prompt strings, in execution order

    Returns:
        List of ChainStep objects
    """
    return [
        ChainStep(
            id=f"step-{i}",
            order=i,
            name=f"Step {i}",
            prompt=prompt,
            output_variable=f"step{i}Output",
            input_variables=[f"step{i - 1}Output"] if i > 1 else [],
        )
        for i, prompt in enumerate(prompts, 1)
    ]
