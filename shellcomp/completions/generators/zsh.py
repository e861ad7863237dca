"""Zsh completion script generator."""

from __future__ import annotations

from .common import ScriptContext, render

__all__ = ["generate_zsh"]

_TEMPLATE = r"""#compdef @@PROG@@
compdef _@@FUNC@@ @@PROG@@

# zsh completion for @@PROG@@                              -*- shell-script -*-
# Generated by: @@PROG@@ completion zsh

__@@FUNC@@_debug()
{
    local file="$@@DEBUG_FILE_ENV@@"
    if [[ -n ${file} ]]; then
        echo "$*" >> "${file}"
    fi
}

_@@FUNC@@()
{
    @@DIRECTIVES@@

    local lastParam lastChar flagPrefix requestComp out directive comp text lastText noSpace
    local -a completions

    __@@FUNC@@_debug "\n========= starting completion logic =========="
    __@@FUNC@@_debug "CURRENT: ${CURRENT}, words[*]: ${words[*]}"

    # Complete at the cursor, ignoring the words after it
    words=("${=words[1,CURRENT]}")
    __@@FUNC@@_debug "Truncated words[*]: ${words[*]},"

    lastParam=${words[-1]}
    lastChar=${lastParam[-1]}
    __@@FUNC@@_debug "lastParam: ${lastParam}, lastChar: ${lastChar}"

    # Candidates for "-n=<TAB>" must be prefixed with the flag
    setopt local_options BASH_REMATCH
    if [[ "${lastParam}" =~ '-.*=' ]]; then
        flagPrefix="-P ${BASH_REMATCH}"
    fi

    # ${words[1]} rather than @@PROG@@ so aliases of the program work too
    requestComp="${words[1]} @@REQUEST_CMD@@ ${words[2,-1]}"
    if [ "${lastChar}" = "" ]; then
        # The cursor follows a space: ask for a new, empty, word
        __@@FUNC@@_debug "Adding extra empty parameter"
        requestComp="${requestComp} \"\""
    fi

    __@@FUNC@@_debug "About to call: eval ${requestComp}"

    # eval handles environment variables and such
    out=$(eval ${requestComp} 2>/dev/null)
    __@@FUNC@@_debug "completion output: ${out}"

    # The directive is the last line, made of a colon and an integer
    local lastLine
    while IFS='\n' read -r line; do
        lastLine=${line}
    done < <(printf "%s\n" "${out[@]}")
    __@@FUNC@@_debug "last line: ${lastLine}"

    if [[ "${lastLine}" =~ '^:[0-9]+$' ]]; then
        directive=${lastLine[2,-1]}
        # Drop the directive line and its newline
        local suffix
        (( suffix=${#lastLine}+2))
        out=${out[1,-$suffix]}
    else
        __@@FUNC@@_debug "No directive found, using the default"
        directive=0
    fi

    __@@FUNC@@_debug "directive: ${directive}"
    __@@FUNC@@_debug "completions: ${out}"
    __@@FUNC@@_debug "flagPrefix: ${flagPrefix}"

    if [ $((directive & shellCompDirectiveError)) -ne 0 ]; then
        __@@FUNC@@_debug "Completion received error. Ignoring completions."
        return
    fi

    local tab="$(printf '\t')"
    while IFS='\n' read -r comp; do
        if [ -n "$comp" ]; then
            text=${comp%%$tab*}
            # _describe separates the candidate from its description with
            # a colon, so colons of the candidate itself are escaped
            comp=${comp//:/\\:}
            comp=${comp//$tab/:}

            __@@FUNC@@_debug "Adding completion: ${comp}"
            completions+=("${comp}")
            lastText=${text}
        fi
    done < <(printf "%s\n" "${out[@]}")

    if [ $((directive & shellCompDirectiveNoSpace)) -ne 0 ]; then
        __@@FUNC@@_debug "Activating nospace."
        noSpace="-S ''"
    fi

    if [ $((directive & shellCompDirectiveFilterFileExt)) -ne 0 ]; then
        local filteringCmd
        filteringCmd='_files'
        for filter in ${completions[@]}; do
            if [ ${filter[1]} != '*' ]; then
                # _files filters with glob patterns
                filter="\*.$filter"
            fi
            filteringCmd+=" -g $filter"
        done
        filteringCmd+=" ${flagPrefix}"

        __@@FUNC@@_debug "File filtering command: $filteringCmd"
        _arguments '*:filename:'"$filteringCmd"
    elif [ $((directive & shellCompDirectiveFilterDirs)) -ne 0 ]; then
        local subdir
        subdir="${completions[1]}"
        if [ -n "$subdir" ]; then
            __@@FUNC@@_debug "Listing directories in $subdir"
            pushd "${subdir}" >/dev/null 2>&1
        else
            __@@FUNC@@_debug "Listing directories in ."
        fi

        local result
        _arguments '*:dirname:_files -/'" ${flagPrefix}"
        result=$?
        if [ -n "$subdir" ]; then
            popd >/dev/null 2>&1
        fi
        return $result
    else
        if [ ${#completions[@]} -eq 1 ]; then
            # A single candidate is inserted as is: drop its description
            completions=("${lastText//:/\\:}")
        fi

        __@@FUNC@@_debug "Calling _describe"
        if eval _describe "completions" completions $flagPrefix $noSpace; then
            __@@FUNC@@_debug "_describe found some completions"
            return 0
        else
            __@@FUNC@@_debug "_describe did not find completions."
            __@@FUNC@@_debug "Checking if we should do file completion."
            if [ $((directive & shellCompDirectiveNoFileComp)) -ne 0 ]; then
                __@@FUNC@@_debug "deactivating file completion"

                # Failing lets zsh try its other matchers
                return 1
            else
                __@@FUNC@@_debug "Activating file completion"
                _arguments '*:filename:_files'" ${flagPrefix}"
            fi
        fi
    fi
}

# Do not run the completion function when being sourced or evaluated
if [ "$funcstack[1]" = "_@@FUNC@@" ]; then
    _@@FUNC@@
fi
"""


def generate_zsh(program_name: str, include_descriptions: bool = True) -> str:
    """Generate the zsh completion script for a program.

    Descriptions are displayed by ``_describe``.

    Args:
        program_name: Name the program is invoked with
        include_descriptions: Ask the program for candidate descriptions

    Returns:
        The script content, for a ``_<program>`` file in ``$fpath``
    """
    context = ScriptContext(program_name, include_descriptions)
    return render(_TEMPLATE, **context.values("local @@NAME@@=@@VALUE@@"))
