"""
Kanban board arithmetic for the deal pipeline.

The board is modelled as ``columns``: a mapping of stage id -> ordered list
of deal ids, where a deal's position is its index in the list. These
functions never touch the database; ``Deal.move_to`` loads the affected
columns, runs ``move_deal`` and writes back whatever changed. The kanban
script in ``static/js/deal_board.js`` performs the same steps on the
browser side for the optimistic render.
"""


class PipelineError(Exception):
    """Raised when a move references a deal or stage that is not on the board"""


def locate(columns, deal_id):
    """Return (stage_id, index) of a deal, or raise PipelineError"""
    for stage_id, deal_ids in columns.items():
        if deal_id in deal_ids:
            return stage_id, deal_ids.index(deal_id)
    raise PipelineError(f'Deal {deal_id} is not on the board')


def move_deal(columns, deal_id, stage_id, index):
    """
    Move ``deal_id`` into ``stage_id`` at ``index``

    Args:
        columns: dict of stage id -> list of deal ids (left untouched)
        deal_id: the dragged deal
        stage_id: destination column
        index: destination index; clamped to the column length

    Returns:
        dict: a new columns mapping; only the source and destination lists
        differ from the input

    Raises:
        PipelineError: unknown deal, unknown stage or negative index
    """
    if stage_id not in columns:
        raise PipelineError(f'Stage {stage_id} is not on the board')
    if index < 0:
        raise PipelineError('Position must be zero or greater')

    source_stage_id, source_index = locate(columns, deal_id)

    moved = {key: list(value) for key, value in columns.items()}
    moved[source_stage_id].pop(source_index)

    destination = moved[stage_id]
    destination.insert(min(index, len(destination)), deal_id)

    return moved


def positions(columns, stage_ids=None):
    """
    Flatten columns into {deal_id: (stage_id, position)}

    Restrict to ``stage_ids`` to get only the rows a move touched.
    """
    result = {}
    for stage_id, deal_ids in columns.items():
        if stage_ids is not None and stage_id not in stage_ids:
            continue
        for position, deal_id in enumerate(deal_ids):
            result[deal_id] = (stage_id, position)
    return result


def build_board(stages, deals):
    """
    Group deals under their stage for the kanban template

    Args:
        stages: stages in display order
        deals: deals already ordered by position

    Returns:
        list of dicts: stage, deals, count, total_value
    """
    by_stage = {stage.pk: [] for stage in stages}
    for deal in deals:
        if deal.stage_id in by_stage:
            by_stage[deal.stage_id].append(deal)

    board = []
    for stage in stages:
        stage_deals = by_stage[stage.pk]
        board.append({
            'stage': stage,
            'deals': stage_deals,
            'count': len(stage_deals),
            'total_value': sum((deal.value or 0) for deal in stage_deals),
        })
    return board
