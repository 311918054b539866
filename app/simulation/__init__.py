from .analysis_directives import AnalysisConfig, build_analysis_directives, build_save_directive
from .circuit_validator import ErcIssue, validate_circuit
from .compiler import CompileResult, NetlistCompiler, compile_netlist, insert_directives
from .connectivity import ConnectivityGraph, build_nets
from .net_colors import NetColorResult, resolve_net_colors
from .net_namer import NetNaming, resolve_net_names
from .netlist_generator import NetlistGenerator, normalize_spice_value
from .preset_manager import PresetManager
from .switch_value import SpdtSwitchValue, SwitchValueError, format_spdt_switch_value, parse_spdt_switch_value
from .union_find import UnionFind
from .value_format import format_component_display_value, parse_metric_value

__all__ = [
    'AnalysisConfig', 'build_analysis_directives', 'build_save_directive',
    'ErcIssue', 'validate_circuit',
    'CompileResult', 'NetlistCompiler', 'compile_netlist', 'insert_directives',
    'ConnectivityGraph', 'build_nets',
    'NetColorResult', 'resolve_net_colors',
    'NetNaming', 'resolve_net_names',
    'NetlistGenerator', 'normalize_spice_value',
    'PresetManager',
    'SpdtSwitchValue', 'SwitchValueError', 'format_spdt_switch_value', 'parse_spdt_switch_value',
    'UnionFind',
    'format_component_display_value', 'parse_metric_value',
]
