from __future__ import annotations

from pathlib import Path
from typing import Optional

from gedcom_fan.core.context import PipelineContext
from gedcom_fan.core.exceptions import ParseExecutionError, PipelineError
from gedcom_fan.extraction import extract_individuals, max_known_generations
from gedcom_fan.hierarchy import HierarchyConfig, HierarchyNode, build_hierarchy
from gedcom_fan.loader import decode_gedcom, load_gedcom_file


class Pipeline:
    """
    Orchestrates decode -> extract -> (on demand) hierarchy.
    No business logic lives here.
    """

    def __init__(self, context: PipelineContext):
        self.ctx = context
        self.log = context.logger

    def _substitute_events(self) -> bool:
        return bool(getattr(self.ctx.config, "substitute_events", False))

    def run(self, data: Optional[bytes] = None) -> PipelineContext:
        """
        Decode ``data`` (or the file at ``ctx.input_path``) and extract
        individuals and places into the context.

        DecodeError and FileNotFoundError propagate unchanged; anything
        unexpected is wrapped in ParseExecutionError.
        """
        self.log.info("Pipeline starting")

        try:
            if data is not None:
                tree = decode_gedcom(data)
            elif self.ctx.input_path:
                tree = load_gedcom_file(self.ctx.input_path)
            else:
                raise PipelineError("No input: pass bytes or set ctx.input_path")

            result = extract_individuals(tree, substitute_events=self._substitute_events())

        except (PipelineError, FileNotFoundError) as exc:
            self.ctx.errors.append(str(exc))
            raise

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            self.ctx.errors.append(str(exc))
            raise ParseExecutionError(str(exc)) from exc

        self.ctx.tree = tree
        self.ctx.individuals = result.individuals
        self.ctx.places = result.places
        self.ctx.families = result.families

        self.ctx.stats.update(
            {
                "records": len(tree.records),
                "encoding": tree.encoding,
                "individuals": len(result.individuals),
                "families": len(result.families),
                "places": len(result.places),
                "max_generations": max_known_generations(result.individuals),
            }
        )
        if self.ctx.input_path:
            self.ctx.stats["source"] = Path(self.ctx.input_path).name

        self.log.info("Pipeline completed successfully")
        return self.ctx

    def build(
        self,
        root_id: Optional[str],
        hierarchy_config: Optional[HierarchyConfig] = None,
    ) -> Optional[HierarchyNode]:
        """Build the fan tree of ``root_id`` from the context's individuals."""
        if hierarchy_config is None:
            hierarchy_config = HierarchyConfig.from_config(self.ctx.config)
        return build_hierarchy(root_id, self.ctx.individuals, hierarchy_config)

    def apply_geocoding(self, place_key: str, **fields) -> bool:
        """
        Merge geocoder output for one town into the place registry and into
        every individual born or deceased there.
        """
        if self.ctx.places is None:
            return False
        changed = self.ctx.places.apply_geocoding(place_key, **fields)
        for individual in self.ctx.individuals.values():
            individual.backfill_geo(place_key, **fields)
        return changed
