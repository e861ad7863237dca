"""Bash completion script generator."""

from __future__ import annotations

from .common import ScriptContext, render

__all__ = ["generate_bash"]

_TEMPLATE = r"""# bash completion for @@PROG@@                             -*- shell-script -*-
# Generated by: @@PROG@@ completion bash

__@@FUNC@@_debug()
{
    if [[ -n ${@@DEBUG_FILE_ENV@@-} ]]; then
        echo "$*" >> "${@@DEBUG_FILE_ENV@@}"
    fi
}

__@@FUNC@@_perform_completion()
{
    __@@FUNC@@_debug
    __@@FUNC@@_debug "========= starting completion logic =========="
    __@@FUNC@@_debug "cur is ${cur}, words[*] is ${words[*]}, #words[@] is ${#words[@]}, cword is $cword"

    # Complete at the cursor, ignoring the words after it
    words=("${words[@]:0:$cword+1}")
    __@@FUNC@@_debug "Truncated words[*]: ${words[*]},"

    @@DIRECTIVES@@

    local out requestComp lastParam lastChar comp directive args flagPrefix

    # ${words[0]} rather than @@PROG@@ so aliases of the program work too
    args=("${words[@]:1}")
    requestComp="${words[0]} @@REQUEST_CMD@@ ${args[*]}"

    lastParam=${words[$((${#words[@]}-1))]}
    lastChar=${lastParam:$((${#lastParam}-1)):1}
    __@@FUNC@@_debug "lastParam ${lastParam}, lastChar ${lastChar}"

    if [ -z "${cur}" ] && [ "${lastChar}" != "=" ]; then
        # The cursor follows a space: ask for a new, empty, word
        __@@FUNC@@_debug "Adding extra empty parameter"
        requestComp="${requestComp} \"\""
    fi

    # Bash only replaces what follows the "=" of "-n=<TAB>"
    if [[ "${cur}" == -*=* ]]; then
        flagPrefix="${cur%%=*}="
        cur="${cur#*=}"
    fi

    __@@FUNC@@_debug "Calling ${requestComp}"
    # eval handles environment variables and such
    out=$(eval "${requestComp}" 2>/dev/null)

    # The directive is the integer following the last colon
    directive=${out##*:}
    if [[ "${out}" == *:* && "${directive}" =~ ^[0-9]+$ ]]; then
        out=${out%:*}
    else
        __@@FUNC@@_debug "No directive found, using the default"
        directive=0
    fi
    __@@FUNC@@_debug "The completion directive is: ${directive}"
    __@@FUNC@@_debug "The completions are: ${out[*]}"

    if [ $((directive & shellCompDirectiveError)) -ne 0 ]; then
        __@@FUNC@@_debug "Received error from custom completion code"
        return
    else
        if [ $((directive & shellCompDirectiveNoSpace)) -ne 0 ]; then
            if [[ $(type -t compopt) = "builtin" ]]; then
                __@@FUNC@@_debug "Activating no space"
                compopt -o nospace
            fi
        fi
        if [ $((directive & shellCompDirectiveNoFileComp)) -ne 0 ]; then
            if [[ $(type -t compopt) = "builtin" ]]; then
                __@@FUNC@@_debug "Activating no file completion"
                compopt +o default
            fi
        fi
    fi

    if [ $((directive & shellCompDirectiveFilterFileExt)) -ne 0 ]; then
        local fullFilter filter filteringCmd

        # Unquoted so the newlines split the extensions
        for filter in ${out[*]}; do
            fullFilter+="$filter|"
        done

        filteringCmd="_filedir $fullFilter"
        __@@FUNC@@_debug "File filtering command: $filteringCmd"
        $filteringCmd
    elif [ $((directive & shellCompDirectiveFilterDirs)) -ne 0 ]; then
        # printf strips the trailing newline
        local subdir
        subdir=$(printf "%s" "${out[0]}")
        if [ -n "$subdir" ]; then
            __@@FUNC@@_debug "Listing directories in $subdir"
            pushd "$subdir" >/dev/null 2>&1 && _filedir -d && popd >/dev/null 2>&1 || return
        else
            __@@FUNC@@_debug "Listing directories in ."
            _filedir -d
        fi
    else
        local tab
        tab=$(printf '\t')
        local longest=0
        # Measure the longest candidate to align the descriptions
        while IFS='' read -r comp; do
            comp=${comp%%$tab*}
            if ((${#comp}>longest)); then
                longest=${#comp}
            fi
        done < <(printf "%s\n" "${out[@]}")

        local completions=()
        while IFS='' read -r comp; do
            if [ -z "$comp" ]; then
                continue
            fi

            __@@FUNC@@_debug "Original comp: $comp"
            comp="$(__@@FUNC@@_format_comp_descriptions "$comp" "$longest")"
            __@@FUNC@@_debug "Final comp: $comp"
            completions+=("$comp")
        done < <(printf "%s\n" "${out[@]}")

        while IFS='' read -r comp; do
            if [ -n "${ZSH_VERSION-}" ]; then
                # zsh running this script through bashcompinit needs the --flag= prefix
                COMPREPLY+=("$flagPrefix$comp")
            else
                COMPREPLY+=("$comp")
            fi
        done < <(compgen -W "${completions[*]}" -- "$cur")

        # A single candidate is inserted as is: drop its description
        if [ ${#COMPREPLY[*]} -eq 1 ]; then
            __@@FUNC@@_debug "COMPREPLY[0]: ${COMPREPLY[0]}"
            comp="${COMPREPLY[0]%% *}"
            __@@FUNC@@_debug "Removed description from single completion, which is now: ${comp}"
            COMPREPLY=()
            COMPREPLY+=("$comp")
        fi
    fi

    __@@FUNC@@_handle_special_char "$cur" :
    __@@FUNC@@_handle_special_char "$cur" =
}

__@@FUNC@@_handle_special_char()
{
    local comp="$1"
    local char=$2
    # Readline only replaces what follows a word break character
    if [[ "$comp" == *${char}* && "$COMP_WORDBREAKS" == *${char}* ]]; then
        local word=${comp%"${comp##*${char}}"}
        local idx=${#COMPREPLY[*]}
        while [[ $((--idx)) -ge 0 ]]; do
            COMPREPLY[$idx]=${COMPREPLY[$idx]#"$word"}
        done
    fi
}

__@@FUNC@@_format_comp_descriptions()
{
    local tab
    tab=$(printf '\t')
    local comp="$1"
    local longest=$2

    if [[ "$comp" == *$tab* ]]; then
        desc=${comp#*$tab}
        comp=${comp%%$tab*}

        # Two spaces and two parentheses surround the description
        maxdesclength=$(( COLUMNS - longest - @@RESERVED_COLUMNS@@ ))

        if [[ $maxdesclength -gt @@MIN_DESC@@ ]]; then
            # Pad to align the descriptions
            for ((i = ${#comp} ; i < longest ; i++)); do
                comp+=" "
            done
        else
            # Too narrow to align: leave more room for the text instead
            maxdesclength=$(( COLUMNS - ${#comp} - @@RESERVED_COLUMNS@@ ))
        fi

        if [ $maxdesclength -gt 0 ]; then
            if [ ${#desc} -gt $maxdesclength ]; then
                desc=${desc:0:$(( maxdesclength - 1 ))}
                desc+="…"
            fi
            comp+="  ($desc)"
        fi
    fi

    # printf escapes the special characters
    printf "%q" "${comp}"
}

__start_@@FUNC@@()
{
    local cur prev words cword

    COMPREPLY=()
    _get_comp_words_by_ref -n "=:" cur prev words cword

    __@@FUNC@@_perform_completion
}

if [[ $(type -t compopt) = "builtin" ]]; then
    complete -o default -F __start_@@FUNC@@ @@PROG@@
else
    complete -o default -o nospace -F __start_@@FUNC@@ @@PROG@@
fi

# ex: ts=4 sw=4 et filetype=sh
"""


def generate_bash(program_name: str, include_descriptions: bool = True) -> str:
    """Generate the bash completion script for a program.

    The script relies on the bash-completion package for
    ``_get_comp_words_by_ref`` and ``_filedir``.

    Args:
        program_name: Name the program is invoked with
        include_descriptions: Ask the program for candidate descriptions

    Returns:
        The script content, to be sourced by bash
    """
    context = ScriptContext(program_name, include_descriptions)
    return render(_TEMPLATE, **context.values("local @@NAME@@=@@VALUE@@"))
