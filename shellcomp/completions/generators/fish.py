"""Fish completion script generator."""

from __future__ import annotations

from .common import ScriptContext, render

__all__ = ["generate_fish"]

_TEMPLATE = r"""# fish completion for @@PROG@@                             -*- shell-script -*-
# Generated by: @@PROG@@ completion fish

function __@@FUNC@@_debug
    set -l file "$@@DEBUG_FILE_ENV@@"
    if test -n "$file"
        echo "$argv" >> $file
    end
end

function __@@FUNC@@_perform_completion
    __@@FUNC@@_debug "Starting __@@FUNC@@_perform_completion"

    # All the words before the cursor
    set -l args (commandline -opc)
    # The word under the cursor, escaped in case it holds a space
    set -l lastArg (string escape -- (commandline -ct))

    __@@FUNC@@_debug "args: $args"
    __@@FUNC@@_debug "last arg: $lastArg"

    # An empty word escapes to '', so it is still passed on
    set -l requestComp "$args[1] @@REQUEST_CMD@@ $args[2..-1] $lastArg"

    __@@FUNC@@_debug "Calling $requestComp"
    set -l results (eval $requestComp 2> /dev/null)

    # Ignore empty lines after the directive
    for line in $results[-1..1]
        if test (string trim -- $line) = ""
            set results $results[1..-2]
        else
            break
        end
    end

    set -l comps $results[1..-2]
    set -l directiveLine $results[-1]

    # Candidates for "-n=<TAB>" must be prefixed with the flag
    set -l flagPrefix (string match -r -- '-.*=' "$lastArg")

    __@@FUNC@@_debug "Comps: $comps"
    __@@FUNC@@_debug "DirectiveLine: $directiveLine"
    __@@FUNC@@_debug "flagPrefix: $flagPrefix"

    for comp in $comps
        printf "%s%s\n" "$flagPrefix" "$comp"
    end

    printf "%s\n" "$directiveLine"
end

# Store the candidates in __@@FUNC@@_comp_results; fail when fish should
# complete files instead
function __@@FUNC@@_prepare_completions
    __@@FUNC@@_debug ""
    __@@FUNC@@_debug "========= starting completion logic =========="

    set --erase __@@FUNC@@_comp_results

    set -l results (__@@FUNC@@_perform_completion)
    __@@FUNC@@_debug "Completion results: $results"

    if test -z "$results"
        __@@FUNC@@_debug "No completion, probably due to a failure"
        return 1
    end

    set -l directive 0
    if string match -q -r -- '^:[0-9]+$' "$results[-1]"
        set directive (string sub --start 2 -- $results[-1])
        set --global __@@FUNC@@_comp_results $results[1..-2]
    else
        __@@FUNC@@_debug "No directive found, using the default"
        set --global __@@FUNC@@_comp_results $results
    end

    __@@FUNC@@_debug "Completions are: $__@@FUNC@@_comp_results"
    __@@FUNC@@_debug "Directive is: $directive"

    @@DIRECTIVES@@

    set -l compErr (math --scale 0 "floor($directive / $shellCompDirectiveError) % 2")
    if test $compErr -eq 1
        __@@FUNC@@_debug "Received error directive: aborting."
        set --erase __@@FUNC@@_comp_results
        # The error directive forbids file completion too
        return 0
    end

    set -l filefilter (math --scale 0 "floor($directive / $shellCompDirectiveFilterFileExt) % 2")
    set -l dirfilter (math --scale 0 "floor($directive / $shellCompDirectiveFilterDirs) % 2")
    if test $filefilter -eq 1
        # Each candidate is an extension to keep
        set -l files
        for ext in $__@@FUNC@@_comp_results
            set -a files (__fish_complete_suffix ".$ext")
        end
        set --global __@@FUNC@@_comp_results $files
        return 0
    end
    if test $dirfilter -eq 1
        # The only candidate, if any, is the directory to list from
        set -l subdir $__@@FUNC@@_comp_results[1]
        if test -n "$subdir"
            __@@FUNC@@_debug "Listing directories in $subdir"
            pushd $subdir
            set --global __@@FUNC@@_comp_results (__fish_complete_directories (commandline -ct) "")
            popd
        else
            set --global __@@FUNC@@_comp_results (__fish_complete_directories (commandline -ct) "")
        end
        return 0
    end

    set -l nospace (math --scale 0 "floor($directive / $shellCompDirectiveNoSpace) % 2")
    set -l nofiles (math --scale 0 "floor($directive / $shellCompDirectiveNoFileComp) % 2")

    __@@FUNC@@_debug "nospace: $nospace, nofiles: $nofiles"

    # Keep the candidates matching the word under the cursor
    set -l prefix (commandline -t | string escape --style=regex)
    __@@FUNC@@_debug "prefix: $prefix"
    set --global __@@FUNC@@_comp_results (string match -r -- "^$prefix.*" $__@@FUNC@@_comp_results)
    __@@FUNC@@_debug "Filtered completions are: $__@@FUNC@@_comp_results"

    set -l numComps (count $__@@FUNC@@_comp_results)
    __@@FUNC@@_debug "numComps: $numComps"

    if test $numComps -eq 1
        # A single candidate is inserted as is: drop its description
        set -l split (string split --max 1 \t $__@@FUNC@@_comp_results[1])
        set --global __@@FUNC@@_comp_results $split[1]

        # Fish adds no space after any of @=/:., so only the other
        # candidates need a second, longer, candidate to keep the cursor
        set -l lastChar (string sub -s -1 -- $split[1])
        if test $nospace -ne 0; and not string match -r -q "[@=/:.,]" -- "$lastChar"
            __@@FUNC@@_debug "Adding second completion to perform nospace directive"
            set --global __@@FUNC@@_comp_results $split[1] $split[1].
        end
    end

    if test $numComps -eq 0; and test $nofiles -eq 0
        # Like bash and zsh, complete files only when nothing else matched
        __@@FUNC@@_debug "Requesting file completion"
        return 1
    end

    return 0
end

# Remove any completions previously defined for @@PROG@@
complete -c @@PROG@@ -e

# The condition fills __@@FUNC@@_comp_results, which the arguments list uses;
# -k keeps the order the program chose
complete -c @@PROG@@ -n '__@@FUNC@@_prepare_completions' -f -k -a '$__@@FUNC@@_comp_results'
"""


def generate_fish(program_name: str, include_descriptions: bool = True) -> str:
    """Generate the fish completion script for a program.

    Args:
        program_name: Name the program is invoked with
        include_descriptions: Ask the program for candidate descriptions

    Returns:
        The script content, for ``~/.config/fish/completions/<program>.fish``
    """
    context = ScriptContext(program_name, include_descriptions)
    return render(_TEMPLATE, **context.values("set -l @@NAME@@ @@VALUE@@"))
