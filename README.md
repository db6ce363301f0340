# alteredstate

Keep track of named *scenarios* for a lab directory. Each scenario lives in
its own folder under the scenarios directory and holds a `config.json` with
its name, description, image, hooks, exclusions, snapshots and the state file
it plays (`playable_state`).

## Installation

```
pip install .
```

## Configuration

The tool reads a JSON configuration file. By default it looks for
`config.json` next to the running program; pass `--config` to use another
one. `domain` and `hostname` are required:

```json
{
  "domain": "lab.example.com",
  "hostname": "dc01.lab.example.com",
  "never_touch_these_attributes": ["whenChanged"],
  "paths": {},
  "logging": {}
}
```

Any entry left out of `paths` or `logging` falls back to a default next to
the program: `scenarios/` (holding `scenario_state.json`,
`schema_attributes.json` and `naming_contexts.json`), `temp/` (holding
`actions.ps1`), `wwwroot/` with `wwwroot/images/`, and `logs/`. On start-up
the directories are created and the three JSON files are seeded with empty
content when they are missing.

If no scenario is recorded as active but the scenarios directory is not
empty, the tool stops with an error.

## Commands

List the scenarios and show which one is active; `--detailed` also lists
each scenario's snapshots:

```
altered-state list
altered-state list --detailed
```

Change the description of a scenario, or the state it plays:

```
altered-state update --name lab1 --description "Kerberoasting lab"
altered-state update --name lab1 --set-playable snapshot-2.bin
```

At least one of `--description` / `-d` or `--set-playable` must be given.

Logging is at error level by default; raise it with `-v` (repeat for more
detail) or lower it with `-q`. The command exits with status 1 and a message
on standard error when the configuration or a scenario config cannot be read.

When a scenario config is loaded, relative hook and image paths are looked
up beside the program and then beside the config file; they are made absolute
and the config file is rewritten. A missing hook script or image is an error.

## Library use

- `alteredstate.scenarios`: `ScenarioConfig` (`load_from_path`,
  `load_for_scenario`, `validate`, `save_to_path`, `finalize_paths` and the
  `copy_*_to_directory` helpers), `ScenarioHookConfig`, `ScenarioHookType`,
  `SnapshotEntry`, `load_all`, and `ScenarioConfigError`.
- `alteredstate.scenario_state`: `ScenarioState` and `ScenarioRef` record the
  active and previous scenario; `ScenarioExportType` names the export kinds.
- `alteredstate.app_config`: `AppConfig` and `ConfigError`;
  `alteredstate.paths`: `PathsConfig`, `LoggingConfig`, `base_directory`.
- `alteredstate.context`: `AppContext.create` loads the configuration,
  prepares the directories and reads the state.
- `alteredstate.commands`: `list_scenarios` and `update_scenario`.
- `alteredstate.exclusions`: `ExclusionConfig`, `ObjectMatch`, `ChangeRule`,
  `ObjectChangeType`.
- `alteredstate.comparer.compare_states` takes two collections of objects
  that have `dn`, `hash`, `is_deleted`, `name` and `attributes`, and returns,
  per distinguished name, the ordered `RemediationAction`s (create,
  reanimate, modify, delete) that turn the current state into the target.
  Tombstones in the target are merged with matching deletes or dropped.
- `alteredstate.ldap_helpers`: `prepare_ldap_url`, `prepare_ldap_dc`,
  `domain_to_dc`, `get_type`, `LdapSearchEntry`, `EntryType`.
- `alteredstate.ldap_options`: `LdapOptions`,
  `generate_ldap_options_from_config`, and `LdapNamingContexts` for the
  naming-contexts file.

## What it does not do

The package does not connect to a directory server. It has no commands to
capture a new scenario or snapshot, to activate, reset or delete a scenario,
or to serve a web page. It does not read or write directory export files,
does not turn remediation actions into scripts, and never runs hook scripts.
`compare_states` works only on objects the caller supplies.

## Running the tests

```
pip install .[test]
pytest
```